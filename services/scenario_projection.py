"""
Scenario projection - conservative, moderate and optimistic customer and
revenue estimates from lobby counts
"""

from types import MappingProxyType
from typing import Mapping

from services.business_case_models import CampaignSignalInput, ConversionRates, ScenarioResult
from services.enums import Scenario
from utils.stats_utils import round_half_up

SCENARIO_CONVERSION_RATES = MappingProxyType({
    Scenario.CONSERVATIVE: ConversionRates(neat_idea=0.02, probably_buy=0.15, take_my_money=0.45),
    Scenario.MODERATE: ConversionRates(neat_idea=0.05, probably_buy=0.25, take_my_money=0.65),
    Scenario.OPTIMISTIC: ConversionRates(neat_idea=0.10, probably_buy=0.40, take_my_money=0.80),
})

# Gross margin assumed for every scenario until real costs are supplied
DEFAULT_SCENARIO_MARGIN = 40


def expected_customers(signals: CampaignSignalInput, rates: ConversionRates) -> int:
    """Sum the three tier conversions, then round once"""
    return round_half_up(
        signals.neat_idea_count * rates.neat_idea +
        signals.probably_buy_count * rates.probably_buy +
        signals.take_my_money_count * rates.take_my_money
    )


def project_scenario(signals: CampaignSignalInput,
                     rates: ConversionRates,
                     price: float) -> ScenarioResult:
    """
    Project customers and revenue for one set of conversion rates.

    Args:
        signals: Campaign demand counts
        rates: Conversion rate per intensity tier
        price: Unit price the customers are assumed to pay

    Returns:
        ScenarioResult with revenue = customers * price
    """
    customers = expected_customers(signals, rates)
    return ScenarioResult(
        customers=customers,
        revenue=round_half_up(customers * price, 2),
        margin=DEFAULT_SCENARIO_MARGIN,
    )


def project_scenarios(signals: CampaignSignalInput, price: float) -> Mapping[Scenario, ScenarioResult]:
    """Project every scenario in SCENARIO_CONVERSION_RATES at the same price"""
    return {
        scenario: project_scenario(signals, rates, price)
        for scenario, rates in SCENARIO_CONVERSION_RATES.items()
    }
