"""
CostEstimationService - cost breakdown, break-even and price sweeps
Used alongside the business case to weigh projected revenue against costs
"""

import logging
import math
from typing import Any, List, Mapping, Union

from services.business_case_models import (
    CostBreakdown, CostInput, CostReport, PriceRange, ProfitabilityPoint,
    COST_INPUT_ALIASES, normalize_keys
)
from services.common.result import Result
from services.common.validation import (
    INVALID_PRICE_RANGE, parse_number, require_mapping
)

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_FEE = 0.05
PROFITABILITY_STEPS = 10


def _percent_of(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0


def estimate_costs(cost_input: CostInput) -> CostReport:
    """
    Break a campaign's costs down and work out profit, margin and ROI.

    Shipping is per unit, marketing is a flat budget and the platform fee is
    a fraction of gross revenue (5% unless given).

    Args:
        cost_input: Revenue, unit costs and optional extras

    Returns:
        CostReport; margin and ROI are 0 when revenue or cost is 0
    """
    shipping_per_unit = cost_input.shipping_cost_per_unit or 0
    platform_fee = DEFAULT_PLATFORM_FEE if cost_input.platform_fee is None else cost_input.platform_fee

    total_production_cost = cost_input.production_cost_per_unit * cost_input.units_sold
    total_shipping_cost = shipping_per_unit * cost_input.units_sold
    total_marketing_cost = cost_input.marketing_budget or 0
    total_platform_fee = cost_input.gross_revenue * platform_fee

    total_cost = total_production_cost + total_shipping_cost + total_marketing_cost + total_platform_fee
    net_profit = cost_input.gross_revenue - total_cost

    return CostReport(
        gross_revenue=cost_input.gross_revenue,
        total_production_cost=total_production_cost,
        total_shipping_cost=total_shipping_cost,
        total_marketing_cost=total_marketing_cost,
        total_platform_fee=total_platform_fee,
        total_cost=total_cost,
        net_profit=net_profit,
        profit_margin=_percent_of(net_profit, cost_input.gross_revenue),
        roi=_percent_of(net_profit, total_cost),
        breakdown_by_category=CostBreakdown(
            production=_percent_of(total_production_cost, total_cost),
            shipping=_percent_of(total_shipping_cost, total_cost),
            marketing=_percent_of(total_marketing_cost, total_cost),
            platform_fee=_percent_of(total_platform_fee, total_cost),
        ),
    )


def calculate_break_even_units(price: float, cost_per_unit: float, fixed_costs: float) -> float:
    """
    Units needed before contribution margin covers fixed costs.

    Returns the raw quotient (round up for whole units), or math.inf when
    each unit earns nothing over its cost.
    """
    if price <= cost_per_unit:
        return math.inf
    return fixed_costs / (price - cost_per_unit)


def project_profitability(cost_per_unit: float,
                          price_range: Union[PriceRange, Mapping[str, float]],
                          units_sold: float) -> List[ProfitabilityPoint]:
    """
    Sweep price linearly across a range in ten equal steps.

    Args:
        cost_per_unit: Cost to make one unit
        price_range: PriceRange or mapping with 'min' and 'max'
        units_sold: Units assumed sold at every price

    Returns:
        Eleven ProfitabilityPoints in ascending price order, from min to max
    """
    if isinstance(price_range, PriceRange):
        min_price, max_price = price_range.min, price_range.max
    else:
        min_price, max_price = price_range['min'], price_range['max']

    step = (max_price - min_price) / PROFITABILITY_STEPS
    points = []
    for index in range(PROFITABILITY_STEPS + 1):
        # Pin the last point so float drift never misses the upper bound
        price = max_price if index == PROFITABILITY_STEPS else min_price + index * step
        unit_profit = price - cost_per_unit
        points.append(ProfitabilityPoint(
            price=price,
            margin=unit_profit / price * 100 if price > 0 else 0,
            profit=unit_profit * units_sold,
        ))
    return points


class CostEstimationService:
    """Validates request payloads and runs the cost calculations"""

    def __init__(self, default_platform_fee: float = DEFAULT_PLATFORM_FEE):
        """
        Initialize the cost estimation service.

        Args:
            default_platform_fee: Fee fraction applied when a request omits one
        """
        self.default_platform_fee = default_platform_fee

    def estimate(self, payload: Any) -> Result[CostReport]:
        """
        Estimate costs from a request payload.

        Args:
            payload: Mapping with gross_revenue, production_cost_per_unit,
                units_sold and optional shipping_cost_per_unit,
                marketing_budget and platform_fee

        Returns:
            Result with the CostReport or a validation failure
        """
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping
        data = normalize_keys(mapping.data, COST_INPUT_ALIASES)

        values = {}
        for field, required in (('gross_revenue', True),
                                ('production_cost_per_unit', True),
                                ('units_sold', True),
                                ('shipping_cost_per_unit', False),
                                ('marketing_budget', False)):
            parsed = parse_number(data, field, required=required)
            if parsed.is_failure:
                return parsed
            values[field] = parsed.data

        platform_fee = parse_number(data, 'platform_fee', default=self.default_platform_fee, maximum=1)
        if platform_fee.is_failure:
            return platform_fee
        values['platform_fee'] = platform_fee.data

        report = estimate_costs(CostInput(**values))
        logger.info(f"Cost estimate: net profit {report.net_profit:.2f}, margin {report.profit_margin:.1f}%")
        return Result.success(report)

    def break_even(self, payload: Any) -> Result[float]:
        """Validate a break-even request; the result may be math.inf"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping

        values = {}
        for field in ('price', 'cost_per_unit', 'fixed_costs'):
            parsed = parse_number(mapping.data, field, required=(field != 'fixed_costs'), default=0)
            if parsed.is_failure:
                return parsed
            values[field] = parsed.data

        return Result.success(calculate_break_even_units(**values))

    def profitability(self, payload: Any) -> Result[List[ProfitabilityPoint]]:
        """Validate a price sweep request and project profitability"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping

        values = {}
        for field in ('cost_per_unit', 'min_price', 'max_price', 'units_sold'):
            parsed = parse_number(mapping.data, field, required=True)
            if parsed.is_failure:
                return parsed
            values[field] = parsed.data

        if values['min_price'] > values['max_price']:
            return Result.failure("min_price must not exceed max_price", code=INVALID_PRICE_RANGE,
                                  metadata={'min_price': values['min_price'],
                                            'max_price': values['max_price']})

        return Result.success(project_profitability(
            values['cost_per_unit'],
            PriceRange(min=values['min_price'], max=values['max_price']),
            values['units_sold'],
        ))
