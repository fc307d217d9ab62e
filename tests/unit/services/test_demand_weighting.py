"""
Tests for demand weighting
"""

import pytest

from services.demand_weighting import (
    INTENSITY_WEIGHTS, lobby_conviction, total_demand_signals, weigh_lobbies, weighted_demand
)
from services.enums import Intensity
from tests.conftest import create_test_signals


class TestDemandWeighting:

    def test_intensity_weights(self):
        assert INTENSITY_WEIGHTS[Intensity.NEAT_IDEA] == 1
        assert INTENSITY_WEIGHTS[Intensity.PROBABLY_BUY] == 3
        assert INTENSITY_WEIGHTS[Intensity.TAKE_MY_MONEY] == 5

    def test_intensity_weights_are_read_only(self):
        with pytest.raises(TypeError):
            INTENSITY_WEIGHTS[Intensity.NEAT_IDEA] = 2

    def test_market_sizing(self):
        """Weighted demand and total signals for a typical campaign"""
        signals = create_test_signals(
            neat_idea_count=40,
            probably_buy_count=30,
            take_my_money_count=20,
            support_count=10,
            intent_count=10,
        )

        assert weighted_demand(signals) == 40 * 1 + 30 * 3 + 20 * 5 == 190
        assert total_demand_signals(signals) == 40 + 30 + 20 + 10 + 10 == 110

    def test_zero_counts(self):
        signals = create_test_signals(
            neat_idea_count=0, probably_buy_count=0, take_my_money_count=0,
            support_count=0, intent_count=0,
        )

        assert weighted_demand(signals) == 0
        assert total_demand_signals(signals) == 0

    def test_negative_counts_are_not_validated(self):
        """The core trusts its callers; a negative count simply flows through"""
        assert weigh_lobbies(-1, 0, 0) == -1

    def test_lobby_conviction(self):
        assert lobby_conviction(0, 0, 10) == 5
        assert lobby_conviction(1, 1, 1) == pytest.approx(3)
        assert lobby_conviction(0, 0, 0) == 0
