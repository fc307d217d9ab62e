"""
Campaign signal score - a 0-100 measure of how convincing a campaign's
demand looks, also used as a quality input to the business case
"""

import math

from services.business_case_models import SignalScoreInput, SignalScoreResult
from services.demand_weighting import lobby_conviction
from services.enums import ConfidenceLevel, Scenario
from services.scenario_projection import SCENARIO_CONVERSION_RATES
from utils.stats_utils import clamp, round_half_up

VERIFIED_INTENT_BONUS = 0.2
INTENT_CONVERSION_RATE = 0.4
MAX_MOMENTUM = 2
COMPLETENESS_BOOST = 0.3

# Component weights of the raw score
DEMAND_VALUE_WEIGHT = 18
INTENT_VOLUME_WEIGHT = 8
SUPPORT_WEIGHT = 3
LOBBY_REACH_WEIGHT = 5
CONVICTION_WEIGHT = 4
MOMENTUM_WEIGHT = 6
FRAUD_PENALTY = 20

SIGNAL_TIER_THRESHOLDS = (
    (80, ConfidenceLevel.VERY_HIGH),
    (55, ConfidenceLevel.HIGH),
    (35, ConfidenceLevel.MEDIUM),
)


def signal_tier(score: float) -> ConfidenceLevel:
    for threshold, tier in SIGNAL_TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return ConfidenceLevel.LOW


def compute_signal_score(inputs: SignalScoreInput) -> SignalScoreResult:
    """
    Compute the signal score and a moderate-scenario revenue projection.

    Args:
        inputs: Pledge, lobby, momentum and fraud figures for a campaign

    Returns:
        SignalScoreResult with the clamped score and its components
    """
    weighted_intent = inputs.intent_count + VERIFIED_INTENT_BONUS * inputs.intent_phone_verified_count
    total_lobbies = inputs.neat_idea_count + inputs.probably_buy_count + inputs.take_my_money_count
    conviction = lobby_conviction(
        inputs.neat_idea_count,
        inputs.probably_buy_count,
        inputs.take_my_money_count,
    )
    demand_value = weighted_intent * inputs.median_price_ceiling
    momentum = clamp(inputs.intent_last_7_days / max(1, inputs.intent_prev_7_days), 0, MAX_MOMENTUM)
    completeness_multiplier = 1 + (inputs.completeness_score / 100) * COMPLETENESS_BOOST

    raw_score = (
        DEMAND_VALUE_WEIGHT * math.log10(1 + max(demand_value, 0)) +
        INTENT_VOLUME_WEIGHT * math.log10(1 + max(weighted_intent, 0)) +
        SUPPORT_WEIGHT * math.log10(1 + max(inputs.support_count, 0)) +
        LOBBY_REACH_WEIGHT * math.log10(1 + max(total_lobbies, 0)) +
        CONVICTION_WEIGHT * conviction +
        MOMENTUM_WEIGHT * momentum -
        FRAUD_PENALTY * inputs.fraud_risk_score
    ) * completeness_multiplier

    score = clamp(round_half_up(raw_score, 1), 0, 100)

    rates = SCENARIO_CONVERSION_RATES[Scenario.MODERATE]
    projected_customers = round_half_up(
        inputs.neat_idea_count * rates.neat_idea +
        inputs.probably_buy_count * rates.probably_buy +
        inputs.take_my_money_count * rates.take_my_money +
        inputs.intent_count * INTENT_CONVERSION_RATE
    )
    projected_revenue = round_half_up(projected_customers * inputs.median_price_ceiling)

    return SignalScoreResult(
        score=score,
        inputs=inputs,
        demand_value=demand_value,
        momentum=momentum,
        lobby_conviction=conviction,
        tier=signal_tier(score),
        projected_revenue=projected_revenue,
        projected_customers=projected_customers,
    )
