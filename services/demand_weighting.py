"""
Demand weighting - turns lobby counts by intensity into one demand figure
"""

from types import MappingProxyType

from services.business_case_models import CampaignSignalInput
from services.enums import Intensity

# "Take my money" is a five times stronger signal than "neat idea"
INTENSITY_WEIGHTS = MappingProxyType({
    Intensity.NEAT_IDEA: 1,
    Intensity.PROBABLY_BUY: 3,
    Intensity.TAKE_MY_MONEY: 5,
})


def weigh_lobbies(neat_idea_count, probably_buy_count, take_my_money_count):
    """
    Intensity-weighted lobby count.

    Counts are not validated here; negative counts yield a negative result.
    """
    return (
        neat_idea_count * INTENSITY_WEIGHTS[Intensity.NEAT_IDEA] +
        probably_buy_count * INTENSITY_WEIGHTS[Intensity.PROBABLY_BUY] +
        take_my_money_count * INTENSITY_WEIGHTS[Intensity.TAKE_MY_MONEY]
    )


def lobby_conviction(neat_idea_count, probably_buy_count, take_my_money_count) -> float:
    """Average intensity weight per lobby (1 to 5), 0 when nobody has lobbied"""
    total_lobbies = neat_idea_count + probably_buy_count + take_my_money_count
    if total_lobbies <= 0:
        return 0.0
    return weigh_lobbies(neat_idea_count, probably_buy_count, take_my_money_count) / total_lobbies


def total_demand_signals(signals: CampaignSignalInput) -> int:
    """Lobbies of every intensity plus support and intent pledges"""
    return signals.total_lobbies + signals.support_count + signals.intent_count


def weighted_demand(signals: CampaignSignalInput) -> int:
    return weigh_lobbies(
        signals.neat_idea_count,
        signals.probably_buy_count,
        signals.take_my_money_count,
    )
