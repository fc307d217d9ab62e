"""
BusinessCaseService - revenue projections for brands evaluating a campaign
Answers: "If a brand responded to this campaign, how much could they make?"
"""

import logging
import math
from typing import Any, Dict, Mapping

from services.business_case_models import (
    BreakEvenAnalysis, BusinessCaseReport, CampaignSignalInput, PriceDistribution,
    ScenarioResult, SignalScoreInput, SignalScoreResult, CAMPAIGN_SIGNAL_ALIASES,
    normalize_keys
)
from services.common.result import Result
from services.common.validation import (
    INVALID_FIELD, parse_count, parse_number, parse_price_list, require_mapping
)
from services.confidence_scoring import data_sufficiency, score_confidence
from services.demand_weighting import total_demand_signals, weighted_demand
from services.enums import Scenario
from services.pricing_analysis import analyze_price_distribution, summarize_price_ceilings
from services.scenario_projection import SCENARIO_CONVERSION_RATES, project_scenarios
from services.signal_scoring import compute_signal_score
from utils.stats_utils import round_half_up

logger = logging.getLogger(__name__)

# Break-even assumptions for a brand taking a campaign to market
ASSUMED_COGS_RATIO = 0.35
ASSUMED_SETUP_COSTS = 5000
ASSUMED_MARKETING_COSTS = 2000
FAST_BREAK_EVEN_CUSTOMERS = 500
SLOW_BREAK_EVEN_CUSTOMERS = 50


def calculate_business_case(signals: CampaignSignalInput) -> BusinessCaseReport:
    """
    Build the full business case for a campaign.

    Pure function of its input: zero counts and an empty price list are valid
    and produce zeroed figures rather than errors.

    Args:
        signals: Lobby and pledge counts, price ceilings and quality scores

    Returns:
        BusinessCaseReport with market sizing, three revenue scenarios,
        pricing insight and confidence
    """
    pricing = summarize_price_ceilings(signals.price_ceilings)
    scenarios = project_scenarios(signals, pricing.suggested_price_point)
    confidence_score, confidence_level = score_confidence(signals)
    moderate = scenarios[Scenario.MODERATE]

    return BusinessCaseReport(
        total_demand_signals=total_demand_signals(signals),
        weighted_demand=weighted_demand(signals),
        conservative=scenarios[Scenario.CONSERVATIVE],
        moderate=moderate,
        optimistic=scenarios[Scenario.OPTIMISTIC],
        conversion_rates=SCENARIO_CONVERSION_RATES,
        confidence_level=confidence_level,
        confidence_score=confidence_score,
        avg_price_ceiling=pricing.avg_price_ceiling,
        median_price_ceiling=pricing.median_price_ceiling,
        suggested_price_point=pricing.suggested_price_point,
        price_range=pricing.price_range,
        estimated_customers=moderate.customers,
        data_sufficiency=data_sufficiency(len(signals.price_ceilings)),
        break_even=estimate_break_even(moderate, pricing.median_price_ceiling),
    )


def estimate_break_even(scenario: ScenarioResult, price: float) -> BreakEvenAnalysis:
    """
    Rough break-even for a brand selling at price, using fixed assumptions
    for cost of goods, setup and marketing.
    """
    fixed_costs = ASSUMED_SETUP_COSTS + ASSUMED_MARKETING_COSTS
    unit_contribution = price - price * ASSUMED_COGS_RATIO
    units_sold = math.ceil(fixed_costs / unit_contribution) if unit_contribution > 0 else 0

    if scenario.customers > FAST_BREAK_EVEN_CUSTOMERS:
        time_to_break_even = '~1-2 months'
    elif scenario.customers < SLOW_BREAK_EVEN_CUSTOMERS:
        time_to_break_even = '~6+ months'
    else:
        time_to_break_even = '~3-4 months'

    return BreakEvenAnalysis(
        units_sold=units_sold,
        revenue_needed=round_half_up(price * units_sold),
        time_to_break_even=time_to_break_even,
    )


def calculate_margin(gross_revenue: float,
                     production_cost_per_unit: float,
                     units_sold: float,
                     fixed_costs: float = 0,
                     variable_costs: float = 0) -> int:
    """
    Whole-number profit margin percentage.

    Args:
        gross_revenue: Revenue before costs
        production_cost_per_unit: Cost to make one unit
        units_sold: Units sold
        fixed_costs: One-off costs
        variable_costs: Additional per-unit costs

    Returns:
        Margin in percent, 0 when there is no revenue
    """
    if gross_revenue == 0:
        return 0

    total_costs = (
        production_cost_per_unit * units_sold +
        variable_costs * units_sold +
        fixed_costs
    )
    return round_half_up((gross_revenue - total_costs) / gross_revenue * 100)


class BusinessCaseService:
    """Validates request payloads and runs the business case calculations"""

    COUNT_FIELDS = (
        'neat_idea_count',
        'probably_buy_count',
        'take_my_money_count',
        'support_count',
        'intent_count',
        'intent_verified_count',
    )
    SCORE_FIELDS = ('signal_score', 'completeness_score')
    MAX_SCORE = 100

    SIGNAL_COUNT_FIELDS = (
        'support_count',
        'intent_count',
        'intent_phone_verified_count',
        'intent_last_7_days',
        'intent_prev_7_days',
        'neat_idea_count',
        'probably_buy_count',
        'take_my_money_count',
    )

    def __init__(self, max_price_ceilings: int = 10000):
        """
        Initialize the business case service.

        Args:
            max_price_ceilings: Largest price list accepted in one request
        """
        self.max_price_ceilings = max_price_ceilings

    def parse_signals(self, payload: Any) -> Result[CampaignSignalInput]:
        """Validate a request payload and build a CampaignSignalInput"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping
        data = normalize_keys(mapping.data, CAMPAIGN_SIGNAL_ALIASES)

        values: Dict[str, Any] = {}
        for field in self.COUNT_FIELDS:
            count = parse_count(data, field)
            if count.is_failure:
                return count
            values[field] = count.data

        if values['intent_verified_count'] > values['intent_count']:
            return Result.failure(
                "intent_verified_count must not exceed intent_count",
                code=INVALID_FIELD, metadata={'field': 'intent_verified_count'}
            )

        for field in self.SCORE_FIELDS:
            score = parse_number(data, field, default=0, maximum=self.MAX_SCORE)
            if score.is_failure:
                return score
            values[field] = score.data

        prices = parse_price_list(data, 'price_ceilings', self.max_price_ceilings)
        if prices.is_failure:
            return prices
        values['price_ceilings'] = prices.data

        return Result.success(CampaignSignalInput(**values))

    def calculate(self, payload: Any) -> Result[BusinessCaseReport]:
        """
        Calculate a business case from a request payload.

        Args:
            payload: Mapping of campaign counts, price ceilings and scores

        Returns:
            Result with the BusinessCaseReport or a validation failure
        """
        signals = self.parse_signals(payload)
        if signals.is_failure:
            logger.info(f"Rejected business case payload: {signals.error}")
            return signals

        report = calculate_business_case(signals.data)
        logger.info(
            f"Business case calculated: {report.total_demand_signals} signals, "
            f"confidence {report.confidence_level.value} ({report.confidence_score})"
        )
        return Result.success(report)

    def margin(self, payload: Any) -> Result[int]:
        """Validate a margin request and calculate the margin percentage"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping

        values = {}
        for field, required in (('gross_revenue', True),
                                ('production_cost_per_unit', True),
                                ('units_sold', True),
                                ('fixed_costs', False),
                                ('variable_costs', False)):
            parsed = parse_number(mapping.data, field, default=0, required=required)
            if parsed.is_failure:
                return parsed
            values[field] = parsed.data

        return Result.success(calculate_margin(**values))

    def analyze_pricing(self, payload: Any) -> Result[PriceDistribution]:
        """Validate a price list and analyze its distribution"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping
        data = normalize_keys(mapping.data, CAMPAIGN_SIGNAL_ALIASES)

        prices = parse_price_list(data, 'price_ceilings', self.max_price_ceilings)
        if prices.is_failure:
            return prices

        return Result.success(analyze_price_distribution(prices.data))

    def signal_score(self, payload: Any) -> Result[SignalScoreResult]:
        """Validate signal score inputs and compute the score"""
        mapping = require_mapping(payload)
        if mapping.is_failure:
            return mapping
        data: Mapping[str, Any] = mapping.data

        values: Dict[str, Any] = {}
        for field in self.SIGNAL_COUNT_FIELDS:
            count = parse_count(data, field)
            if count.is_failure:
                return count
            values[field] = count.data

        if values['intent_phone_verified_count'] > values['intent_count']:
            return Result.failure(
                "intent_phone_verified_count must not exceed intent_count",
                code=INVALID_FIELD, metadata={'field': 'intent_phone_verified_count'}
            )

        for field, maximum in (('median_price_ceiling', None),
                               ('p90_price_ceiling', None),
                               ('fraud_risk_score', 1),
                               ('completeness_score', self.MAX_SCORE)):
            parsed = parse_number(data, field, default=0, maximum=maximum)
            if parsed.is_failure:
                return parsed
            values[field] = parsed.data

        result = compute_signal_score(SignalScoreInput(**values))
        logger.info(f"Signal score computed: {result.score} ({result.tier.value})")
        return Result.success(result)
