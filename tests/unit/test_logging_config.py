"""
Tests for the structured logging setup
"""

import json

import pytest
import structlog
from flask import g

from logging_config import add_request_context, get_logger, service_name_processor, setup_logging


class TestProcessors:

    def test_service_name_is_added(self):
        add_service_name = service_name_processor('demand-signals')

        assert add_service_name(None, 'info', {'event': 'x'}) == {'event': 'x', 'service': 'demand-signals'}

    def test_service_name_bound_by_caller_wins(self):
        add_service_name = service_name_processor('demand-signals')

        assert add_service_name(None, 'info', {'service': 'worker'})['service'] == 'worker'

    def test_request_context_outside_request_is_unchanged(self):
        assert add_request_context(None, 'info', {'event': 'x'}) == {'event': 'x'}

    def test_request_context_inside_request(self, app):
        with app.test_request_context('/health', method='GET'):
            g.request_id = 'abc-123'
            event = add_request_context(None, 'info', {'event': 'x'})

        assert event['request_id'] == 'abc-123'
        assert event['endpoint'] == 'health_check'
        assert event['method'] == 'GET'
        assert event['path'] == '/health'


class TestSetupLogging:

    @pytest.fixture
    def configured(self):
        setup_logging(app_name='demand-signals-test', log_level='INFO')
        yield
        structlog.reset_defaults()

    def test_events_are_json_with_service_name(self, configured, capsys):
        get_logger('tests').info('Business case calculated', signals=12)

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event['event'] == 'Business case calculated'
        assert event['service'] == 'demand-signals-test'
        assert event['signals'] == 12
        assert event['level'] == 'info'

    def test_level_filters_debug(self, configured, capsys):
        get_logger('tests').debug('hidden')

        assert 'hidden' not in capsys.readouterr().out
