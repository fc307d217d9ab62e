"""
Confidence scoring for business case projections

The score is a sum of tiered points for sample size, price data, the
campaign's own quality scores, lobby mix and verified intent. Each tier
table saturates, so piling on more of one input cannot push the score
past that input's ceiling.
"""

from typing import Sequence, Tuple

from services.business_case_models import CampaignSignalInput
from services.demand_weighting import total_demand_signals
from services.enums import ConfidenceLevel
from utils.stats_utils import clamp

# (exclusive lower bound, points), checked top-down
TOTAL_SIGNAL_TIERS = ((200, 30), (100, 20), (50, 10))
TOTAL_SIGNAL_FLOOR = 5

PRICE_DATA_TIERS = ((50, 25), (20, 20), (10, 15), (0, 10))

SIGNAL_SCORE_TIERS = ((75, 25), (55, 20), (35, 10))
SIGNAL_SCORE_FLOOR = 5

COMPLETENESS_TIERS = ((80, 10), (60, 5))
COMPLETENESS_FLOOR = 2

STRONG_INTENT_SHARE = 0.2
STRONG_INTENT_POINTS = 5

VERIFIED_MAJORITY_RATIO = 0.5
VERIFIED_MAJORITY_POINTS = 5
VERIFIED_SOME_POINTS = 2

# (inclusive lower bound, level), checked top-down
CONFIDENCE_LEVEL_THRESHOLDS = (
    (80, ConfidenceLevel.VERY_HIGH),
    (60, ConfidenceLevel.HIGH),
    (40, ConfidenceLevel.MEDIUM),
)

SUFFICIENT_PRICE_POINTS = 20


def tier_points(value: float, tiers: Sequence[Tuple[float, int]], floor: int = 0) -> int:
    for threshold, points in tiers:
        if value > threshold:
            return points
    return floor


def verified_intent_ratio(signals: CampaignSignalInput) -> float:
    if signals.intent_count <= 0:
        return 0.0
    return signals.intent_verified_count / signals.intent_count


def strong_intent_points(signals: CampaignSignalInput) -> int:
    if signals.total_lobbies <= 0:
        return 0
    share = signals.take_my_money_count / signals.total_lobbies
    return STRONG_INTENT_POINTS if share > STRONG_INTENT_SHARE else 0


def verified_intent_points(signals: CampaignSignalInput) -> int:
    ratio = verified_intent_ratio(signals)
    if ratio >= VERIFIED_MAJORITY_RATIO:
        return VERIFIED_MAJORITY_POINTS
    if ratio > 0:
        return VERIFIED_SOME_POINTS
    return 0


def confidence_level_for(score: float) -> ConfidenceLevel:
    for threshold, level in CONFIDENCE_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return ConfidenceLevel.LOW


def score_confidence(signals: CampaignSignalInput) -> Tuple[int, ConfidenceLevel]:
    """
    Score how far a business case can be trusted.

    Args:
        signals: Campaign demand counts and quality scores

    Returns:
        (confidence_score in 0-100, confidence_level)
    """
    score = (
        tier_points(total_demand_signals(signals), TOTAL_SIGNAL_TIERS, TOTAL_SIGNAL_FLOOR) +
        tier_points(len(signals.price_ceilings), PRICE_DATA_TIERS) +
        tier_points(signals.signal_score, SIGNAL_SCORE_TIERS, SIGNAL_SCORE_FLOOR) +
        tier_points(signals.completeness_score, COMPLETENESS_TIERS, COMPLETENESS_FLOOR) +
        strong_intent_points(signals) +
        verified_intent_points(signals)
    )
    confidence_score = int(clamp(score, 0, 100))
    return confidence_score, confidence_level_for(confidence_score)


def data_sufficiency(price_point_count: int) -> str:
    if price_point_count > SUFFICIENT_PRICE_POINTS:
        return 'Sufficient data for reliable projections'
    return 'Need more price ceiling data for confidence'
