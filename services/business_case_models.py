"""
Value types for the business case and cost estimation services.

Every type here is a frozen dataclass built fresh for each calculation and
never mutated afterwards. ``to_dict`` returns plain JSON-ready data for the
route layer.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.enums import ConfidenceLevel, Scenario


# camelCase keys sent by the campaign front-end, mapped to field names
CAMPAIGN_SIGNAL_ALIASES = {
    'neatIdeaCount': 'neat_idea_count',
    'probablyBuyCount': 'probably_buy_count',
    'takeMyMoneyCount': 'take_my_money_count',
    'supportCount': 'support_count',
    'intentCount': 'intent_count',
    'intentVerifiedCount': 'intent_verified_count',
    'priceCeilings': 'price_ceilings',
    'signalScore': 'signal_score',
    'completenessScore': 'completeness_score',
}

COST_INPUT_ALIASES = {
    'grossRevenue': 'gross_revenue',
    'productionCostPerUnit': 'production_cost_per_unit',
    'unitsSold': 'units_sold',
    'shippingCostPerUnit': 'shipping_cost_per_unit',
    'marketingBudget': 'marketing_budget',
    'platformFee': 'platform_fee',
}


def normalize_keys(payload: Mapping[str, Any], aliases: Mapping[str, str]) -> Dict[str, Any]:
    """Return a copy of payload with camelCase aliases renamed to snake_case"""
    normalized = {}
    for key, value in payload.items():
        normalized[aliases.get(key, key)] = value
    return normalized


@dataclass(frozen=True)
class CampaignSignalInput:
    """Aggregate demand counts and quality scores for one campaign"""
    neat_idea_count: int = 0
    probably_buy_count: int = 0
    take_my_money_count: int = 0
    support_count: int = 0
    intent_count: int = 0
    intent_verified_count: int = 0
    price_ceilings: Tuple[float, ...] = ()
    signal_score: float = 0
    completeness_score: float = 0

    def __post_init__(self):
        # Accept any iterable of prices but store a tuple
        object.__setattr__(self, 'price_ceilings', tuple(self.price_ceilings))

    @property
    def total_lobbies(self) -> int:
        return self.neat_idea_count + self.probably_buy_count + self.take_my_money_count


@dataclass(frozen=True)
class ConversionRates:
    """Fraction of each intensity tier expected to become a customer"""
    neat_idea: float
    probably_buy: float
    take_my_money: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ScenarioResult:
    customers: int
    revenue: float
    margin: float = 40

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PriceRange:
    min: float = 0
    max: float = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class PriceInsights:
    avg_price_ceiling: float
    median_price_ceiling: float
    price_range: PriceRange
    suggested_price_point: float


@dataclass(frozen=True)
class BreakEvenAnalysis:
    units_sold: int
    revenue_needed: float
    time_to_break_even: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BusinessCaseReport:
    """Everything a brand needs to size up a campaign"""
    total_demand_signals: int
    weighted_demand: int
    conservative: ScenarioResult
    moderate: ScenarioResult
    optimistic: ScenarioResult
    conversion_rates: Mapping[Scenario, ConversionRates]
    confidence_level: ConfidenceLevel
    confidence_score: int
    avg_price_ceiling: float
    median_price_ceiling: float
    suggested_price_point: float
    price_range: PriceRange = field(default_factory=PriceRange)
    estimated_customers: int = 0
    data_sufficiency: str = ''
    break_even: Optional[BreakEvenAnalysis] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_demand_signals': self.total_demand_signals,
            'weighted_demand': self.weighted_demand,
            'conservative': self.conservative.to_dict(),
            'moderate': self.moderate.to_dict(),
            'optimistic': self.optimistic.to_dict(),
            'conversion_rates': {
                scenario.value: rates.to_dict()
                for scenario, rates in self.conversion_rates.items()
            },
            'confidence_level': self.confidence_level.value,
            'confidence_score': self.confidence_score,
            'avg_price_ceiling': self.avg_price_ceiling,
            'median_price_ceiling': self.median_price_ceiling,
            'price_range': self.price_range.to_dict(),
            'suggested_price_point': self.suggested_price_point,
            'estimated_customers': self.estimated_customers,
            'data_sufficiency': self.data_sufficiency,
            'break_even': self.break_even.to_dict() if self.break_even else None,
        }


@dataclass(frozen=True)
class CostInput:
    gross_revenue: float
    production_cost_per_unit: float
    units_sold: float
    shipping_cost_per_unit: Optional[float] = None
    marketing_budget: Optional[float] = None
    platform_fee: Optional[float] = None


@dataclass(frozen=True)
class CostBreakdown:
    """Share of total cost per category, in percent"""
    production: float = 0
    shipping: float = 0
    marketing: float = 0
    platform_fee: float = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CostReport:
    gross_revenue: float
    total_production_cost: float
    total_shipping_cost: float
    total_marketing_cost: float
    total_platform_fee: float
    total_cost: float
    net_profit: float
    profit_margin: float
    roi: float
    breakdown_by_category: CostBreakdown

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProfitabilityPoint:
    price: float
    margin: float
    profit: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class PriceBracket:
    bracket: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SuggestedPricePoints:
    economy: float = 0
    standard: float = 0
    premium: float = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class DemandPoint:
    price: float
    estimated_buyers: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PriceDistribution:
    """Shape of buyers' stated price ceilings"""
    total_responses: int
    average_price: float
    median_price: float
    mode_price: float
    price_range: PriceRange
    distribution: List[PriceBracket]
    suggested_price_points: SuggestedPricePoints
    demand_curve: List[DemandPoint]
    optimal_price: float
    max_revenue: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_responses': self.total_responses,
            'average_price': self.average_price,
            'median_price': self.median_price,
            'mode_price': self.mode_price,
            'price_range': self.price_range.to_dict(),
            'distribution': [bracket.to_dict() for bracket in self.distribution],
            'suggested_price_points': self.suggested_price_points.to_dict(),
            'demand_curve': [point.to_dict() for point in self.demand_curve],
            'optimal_price': self.optimal_price,
            'max_revenue': self.max_revenue,
        }


@dataclass(frozen=True)
class SignalScoreInput:
    """Raw campaign activity feeding the signal score"""
    support_count: int = 0
    intent_count: int = 0
    intent_phone_verified_count: int = 0
    median_price_ceiling: float = 0
    p90_price_ceiling: float = 0
    intent_last_7_days: int = 0
    intent_prev_7_days: int = 0
    fraud_risk_score: float = 0
    neat_idea_count: int = 0
    probably_buy_count: int = 0
    take_my_money_count: int = 0
    completeness_score: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SignalScoreResult:
    score: float
    inputs: SignalScoreInput
    demand_value: float
    momentum: float
    lobby_conviction: float
    tier: ConfidenceLevel
    projected_revenue: int
    projected_customers: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'inputs': self.inputs.to_dict(),
            'demand_value': self.demand_value,
            'momentum': self.momentum,
            'lobby_conviction': self.lobby_conviction,
            'tier': self.tier.value,
            'projected_revenue': self.projected_revenue,
            'projected_customers': self.projected_customers,
        }


def finite_or_none(value: float) -> Optional[float]:
    """JSON has no Infinity; map non-finite floats to None"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
