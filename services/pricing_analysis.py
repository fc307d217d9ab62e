"""
Pricing analysis over buyers' stated price ceilings

summarize_price_ceilings feeds the business case; analyze_price_distribution
gives the fuller picture shown on the pricing insights panel.
"""

import logging
import math
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from services.business_case_models import (
    DemandPoint, PriceBracket, PriceDistribution, PriceInsights, PriceRange,
    SuggestedPricePoints
)
from utils.stats_utils import average, median, percentile, round_half_up

logger = logging.getLogger(__name__)

# Buyers tend to convert when the price sits a little under their ceiling
SUGGESTED_PRICE_RATIO = 0.85

CURRENCY_SYMBOL = '£'

# (lower bound inclusive, upper bound exclusive); None means open-ended
PRICE_BRACKETS: Tuple[Tuple[float, Optional[float]], ...] = (
    (0, 10),
    (10, 25),
    (25, 50),
    (50, 100),
    (100, 250),
    (250, None),
)

DEMAND_CURVE_POINTS = 20
ROUND_PRICE_STEP = 5


def summarize_price_ceilings(price_ceilings: Sequence[float]) -> PriceInsights:
    """
    Average, median, range and suggested price point for a list of ceilings.

    An empty list yields zeros everywhere.
    """
    if not price_ceilings:
        return PriceInsights(
            avg_price_ceiling=0,
            median_price_ceiling=0,
            price_range=PriceRange(),
            suggested_price_point=0,
        )

    median_ceiling = median(price_ceilings)
    return PriceInsights(
        avg_price_ceiling=average(price_ceilings),
        median_price_ceiling=median_ceiling,
        price_range=PriceRange(min=min(price_ceilings), max=max(price_ceilings)),
        suggested_price_point=round_half_up(median_ceiling * SUGGESTED_PRICE_RATIO, 2),
    )


def bracket_label(low: float, high: Optional[float]) -> str:
    if high is None:
        return f"{CURRENCY_SYMBOL}{low}+"
    return f"{CURRENCY_SYMBOL}{low}-{high}"


def _in_bracket(price: float, low: float, high: Optional[float]) -> bool:
    if high is None:
        return price >= low
    return low <= price < high


def bracket_distribution(prices: Sequence[float]) -> List[PriceBracket]:
    """Count prices per bracket; percentages are rounded whole numbers"""
    brackets = []
    for low, high in PRICE_BRACKETS:
        count = sum(1 for price in prices if _in_bracket(price, low, high))
        percentage = round_half_up(count / len(prices) * 100) if prices else 0
        brackets.append(PriceBracket(
            bracket=bracket_label(low, high),
            count=count,
            percentage=percentage,
        ))
    return brackets


def buyers_at_or_above(prices: Iterable[float], price: float) -> int:
    return sum(1 for ceiling in prices if ceiling >= price)


def find_optimal_price(prices: Sequence[float], fallback: float) -> Tuple[float, float]:
    """
    Price that maximises price * willing buyers.

    Every observed price is tried first, then round steps from the lowest
    ceiling upwards. Ties keep the earlier candidate.

    Returns:
        (optimal_price, max_revenue)
    """
    candidates = sorted(set(prices))
    low = max(1, math.floor(min(prices)))
    high = max(prices)
    step_price = low
    while step_price <= high:
        candidates.append(step_price)
        step_price += ROUND_PRICE_STEP

    optimal_price = fallback
    max_revenue = 0.0
    for candidate in candidates:
        revenue = candidate * buyers_at_or_above(prices, candidate)
        if revenue > max_revenue:
            max_revenue = revenue
            optimal_price = candidate
    return optimal_price, max_revenue


def most_frequent_price(prices: Sequence[float]) -> float:
    """
    Most common price. Ties go to the lowest whole-number price, then to the
    first-seen fractional price.
    """
    counts = Counter(prices)
    whole = sorted(price for price in counts if float(price).is_integer())
    fractional = [price for price in counts if not float(price).is_integer()]
    # max keeps the first of equally frequent candidates
    return max(whole + fractional, key=counts.__getitem__)


def _empty_distribution(total_responses: int) -> PriceDistribution:
    return PriceDistribution(
        total_responses=total_responses,
        average_price=0,
        median_price=0,
        mode_price=0,
        price_range=PriceRange(),
        distribution=bracket_distribution([]),
        suggested_price_points=SuggestedPricePoints(),
        demand_curve=[],
        optimal_price=0,
        max_revenue=0,
    )


def analyze_price_distribution(price_ceilings: Sequence[float]) -> PriceDistribution:
    """
    Full distribution analysis of price ceilings.

    Only positive prices are analyzed; zero or missing ceilings mean the
    buyer gave no usable answer.

    Args:
        price_ceilings: Buyers' stated maximum prices

    Returns:
        PriceDistribution with brackets, tiered price points, demand curve
        and the revenue-maximising price
    """
    prices = [float(price) for price in price_ceilings if price and price > 0]
    if not prices:
        return _empty_distribution(len(price_ceilings))

    ordered = sorted(prices)
    median_price = median(ordered)
    mode_price = most_frequent_price(prices)

    unique_prices = sorted(set(ordered))
    demand_curve = [
        DemandPoint(
            price=round_half_up(price, 2),
            estimated_buyers=buyers_at_or_above(prices, price),
        )
        for price in unique_prices[:DEMAND_CURVE_POINTS]
    ]

    optimal_price, max_revenue = find_optimal_price(prices, fallback=median_price)
    logger.debug(f"Analyzed {len(prices)} price ceilings, optimal price {optimal_price}")

    return PriceDistribution(
        total_responses=len(prices),
        average_price=round_half_up(average(prices), 2),
        median_price=round_half_up(median_price, 2),
        mode_price=round_half_up(mode_price, 2),
        price_range=PriceRange(
            min=round_half_up(ordered[0], 2),
            max=round_half_up(ordered[-1], 2),
        ),
        distribution=bracket_distribution(prices),
        suggested_price_points=SuggestedPricePoints(
            economy=round_half_up(percentile(ordered, 25), 2),
            standard=round_half_up(percentile(ordered, 50), 2),
            premium=round_half_up(percentile(ordered, 75), 2),
        ),
        demand_curve=demand_curve,
        optimal_price=round_half_up(optimal_price, 2),
        max_revenue=round_half_up(max_revenue, 2),
    )
