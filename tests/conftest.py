# tests/conftest.py
"""
Shared fixtures for the pytest test suite.
Fixtures defined here are automatically available to all tests.
"""
import os

import pytest

from app import create_app
from services.business_case_models import CampaignSignalInput


def create_test_signals(**kwargs):
    """
    Helper to build campaign signal inputs with sensible defaults.
    Used across multiple test files.
    """
    defaults = {
        'neat_idea_count': 10,
        'probably_buy_count': 10,
        'take_my_money_count': 10,
        'support_count': 5,
        'intent_count': 5,
        'intent_verified_count': 2,
        'price_ceilings': (),
        'signal_score': 50,
        'completeness_score': 50,
    }
    defaults.update(kwargs)
    return CampaignSignalInput(**defaults)


@pytest.fixture(scope='module')
def app():
    """A Flask application configured for testing, shared by a test module."""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app(config_name='testing')

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def sample_campaign_payload():
    """Request payload in the camelCase shape the campaign front-end sends"""
    return {
        'neatIdeaCount': 50,
        'probablyBuyCount': 30,
        'takeMyMoneyCount': 20,
        'supportCount': 10,
        'intentCount': 15,
        'intentVerifiedCount': 8,
        'priceCeilings': [25, 30, 35, 40, 45, 50, 50, 55, 60, 60, 65, 70, 75, 80, 90],
        'signalScore': 65,
        'completenessScore': 75,
    }


@pytest.fixture
def sample_cost_payload():
    return {
        'gross_revenue': 10000,
        'production_cost_per_unit': 10,
        'units_sold': 100,
        'shipping_cost_per_unit': 5,
        'marketing_budget': 1000,
        'platform_fee': 0.05,
    }
