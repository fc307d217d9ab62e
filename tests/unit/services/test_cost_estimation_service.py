"""
Tests for CostEstimationService and the cost calculations
"""

import math

import pytest

from services.business_case_models import CostInput, PriceRange
from services.cost_estimation_service import (
    CostEstimationService, calculate_break_even_units, estimate_costs, project_profitability
)


class TestEstimateCosts:

    def test_applies_default_platform_fee(self):
        report = estimate_costs(CostInput(gross_revenue=1000, production_cost_per_unit=5, units_sold=10))

        assert report.total_platform_fee == pytest.approx(50)

    def test_full_breakdown(self):
        report = estimate_costs(CostInput(
            gross_revenue=10000,
            production_cost_per_unit=10,
            units_sold=100,
            shipping_cost_per_unit=5,
            marketing_budget=1000,
            platform_fee=0.05,
        ))

        assert report.total_production_cost == 1000
        assert report.total_shipping_cost == 500
        assert report.total_marketing_cost == 1000
        assert report.total_platform_fee == pytest.approx(500)
        assert report.total_cost == pytest.approx(3000)
        assert report.net_profit == pytest.approx(7000)
        assert report.profit_margin == pytest.approx(70)
        assert report.roi == pytest.approx(7000 / 3000 * 100)

    @pytest.mark.parametrize('cost_input', [
        CostInput(gross_revenue=5000, production_cost_per_unit=12, units_sold=80,
                  shipping_cost_per_unit=3, marketing_budget=400),
        CostInput(gross_revenue=1000, production_cost_per_unit=5, units_sold=10),
        CostInput(gross_revenue=2500, production_cost_per_unit=7.5, units_sold=33,
                  shipping_cost_per_unit=0, marketing_budget=0, platform_fee=0.12),
        CostInput(gross_revenue=0, production_cost_per_unit=4, units_sold=3, marketing_budget=150),
        CostInput(gross_revenue=800, production_cost_per_unit=0, units_sold=0, platform_fee=0.05),
        CostInput(gross_revenue=99999.99, production_cost_per_unit=0.01, units_sold=123456,
                  shipping_cost_per_unit=1.25, marketing_budget=5000, platform_fee=0.3),
    ])
    def test_breakdown_percentages_sum_to_100(self, cost_input):
        report = estimate_costs(cost_input)

        assert sum(report.breakdown_by_category.to_dict().values()) == pytest.approx(100)

    def test_optional_costs_default_to_zero(self):
        report = estimate_costs(CostInput(gross_revenue=1000, production_cost_per_unit=5, units_sold=10))

        assert report.total_shipping_cost == 0
        assert report.total_marketing_cost == 0
        assert report.breakdown_by_category.shipping == 0

    def test_zero_platform_fee_is_respected(self):
        report = estimate_costs(CostInput(
            gross_revenue=1000, production_cost_per_unit=5, units_sold=10, platform_fee=0
        ))

        assert report.total_platform_fee == 0

    def test_zero_revenue_guards_margin(self):
        report = estimate_costs(CostInput(gross_revenue=0, production_cost_per_unit=5, units_sold=10))

        assert report.profit_margin == 0
        assert report.net_profit == -50
        assert report.roi == pytest.approx(-100)

    def test_zero_cost_guards_roi_and_breakdown(self):
        report = estimate_costs(CostInput(
            gross_revenue=0, production_cost_per_unit=0, units_sold=0, platform_fee=0
        ))

        assert report.roi == 0
        assert sum(report.breakdown_by_category.to_dict().values()) == 0

    def test_to_dict_nests_breakdown(self):
        data = estimate_costs(CostInput(gross_revenue=1000, production_cost_per_unit=5, units_sold=10)).to_dict()

        assert set(data['breakdown_by_category']) == {'production', 'shipping', 'marketing', 'platform_fee'}


class TestBreakEvenUnits:

    def test_break_even(self):
        assert calculate_break_even_units(price=30, cost_per_unit=10, fixed_costs=1000) == 50

    def test_price_at_cost_never_breaks_even(self):
        assert calculate_break_even_units(price=10, cost_per_unit=10, fixed_costs=1000) == math.inf

    def test_price_below_cost_never_breaks_even(self):
        assert math.isinf(calculate_break_even_units(price=5, cost_per_unit=10, fixed_costs=0))

    @pytest.mark.parametrize('price,cost_per_unit,fixed_costs', [
        (30, 10, 1000),
        (30, 10, 0.5),
        (10.5, 10, 250),
        (999, 1, 1),
    ])
    def test_fixed_costs_raise_break_even(self, price, cost_per_unit, fixed_costs):
        without_fixed = calculate_break_even_units(price, cost_per_unit, fixed_costs=0)
        with_fixed = calculate_break_even_units(price, cost_per_unit, fixed_costs)

        assert without_fixed == 0
        assert with_fixed > without_fixed

    def test_more_fixed_costs_need_more_units(self):
        low = calculate_break_even_units(price=30, cost_per_unit=10, fixed_costs=1000)
        high = calculate_break_even_units(price=30, cost_per_unit=10, fixed_costs=2000)

        assert high > low

    def test_returns_fractional_units(self):
        assert calculate_break_even_units(price=13, cost_per_unit=10, fixed_costs=10) == pytest.approx(10 / 3)


class TestProjectProfitability:

    @pytest.fixture
    def projections(self):
        return project_profitability(10, PriceRange(min=20, max=100), 100)

    def test_eleven_ascending_points(self, projections):
        prices = [point.price for point in projections]

        assert len(projections) == 11
        assert prices == sorted(prices)
        assert prices[0] == 20
        assert prices[-1] == 100

    def test_profit_and_margin(self, projections):
        first = projections[0]

        assert first.profit == pytest.approx(1000)
        assert first.margin == pytest.approx(50)

    def test_profit_never_decreases_with_price(self, projections):
        profits = [point.profit for point in projections]

        assert profits == sorted(profits)

    def test_accepts_mapping_range(self, projections):
        assert project_profitability(10, {'min': 20, 'max': 100}, 100) == projections

    def test_is_deterministic(self, projections):
        assert project_profitability(10, PriceRange(min=20, max=100), 100) == projections

    def test_zero_price_has_zero_margin(self):
        projections = project_profitability(5, PriceRange(min=0, max=10), 1)

        assert projections[0].margin == 0
        assert projections[0].profit == -5

    def test_single_price_range(self):
        projections = project_profitability(5, PriceRange(min=25, max=25), 2)

        assert all(point.price == 25 for point in projections)


class TestCostEstimationService:

    @pytest.fixture
    def service(self):
        return CostEstimationService()

    def test_estimate(self, service, sample_cost_payload):
        result = service.estimate(sample_cost_payload)

        assert result.is_success
        assert result.data.net_profit == pytest.approx(7000)

    def test_estimate_accepts_camel_case(self, service):
        result = service.estimate({'grossRevenue': 1000, 'productionCostPerUnit': 5, 'unitsSold': 10})

        assert result.is_success
        assert result.data.total_production_cost == 50

    def test_estimate_uses_configured_default_fee(self):
        service = CostEstimationService(default_platform_fee=0.1)

        result = service.estimate({'gross_revenue': 1000, 'production_cost_per_unit': 5, 'units_sold': 10})

        assert result.data.total_platform_fee == pytest.approx(100)

    def test_estimate_requires_revenue(self, service):
        result = service.estimate({'production_cost_per_unit': 5, 'units_sold': 10})

        assert result.is_failure
        assert result.error_code == 'INVALID_FIELD'
        assert result.metadata == {'field': 'gross_revenue'}

    def test_estimate_rejects_negative_cost(self, service):
        result = service.estimate({'gross_revenue': 1000, 'production_cost_per_unit': -5, 'units_sold': 10})

        assert result.is_failure
        assert result.error_code == 'NEGATIVE_VALUE'

    def test_estimate_rejects_fee_above_one(self, service):
        result = service.estimate({
            'gross_revenue': 1000, 'production_cost_per_unit': 5, 'units_sold': 10, 'platform_fee': 5
        })

        assert result.is_failure
        assert result.error_code == 'SCORE_OUT_OF_RANGE'

    def test_break_even_defaults_fixed_costs(self, service):
        result = service.break_even({'price': 30, 'cost_per_unit': 10})

        assert result.is_success
        assert result.data == 0

    def test_break_even_may_be_infinite(self, service):
        result = service.break_even({'price': 10, 'cost_per_unit': 20, 'fixed_costs': 100})

        assert result.is_success
        assert math.isinf(result.data)

    def test_break_even_requires_price(self, service):
        result = service.break_even({'cost_per_unit': 20})

        assert result.is_failure
        assert result.error == 'price is required'

    def test_profitability(self, service):
        result = service.profitability({'cost_per_unit': 10, 'min_price': 20, 'max_price': 100, 'units_sold': 100})

        assert result.is_success
        assert len(result.data) == 11

    def test_profitability_rejects_inverted_range(self, service):
        result = service.profitability({'cost_per_unit': 10, 'min_price': 100, 'max_price': 20, 'units_sold': 1})

        assert result.is_failure
        assert result.error_code == 'INVALID_PRICE_RANGE'
