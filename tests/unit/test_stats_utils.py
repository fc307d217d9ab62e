"""
Tests for the numeric helpers in utils.stats_utils
"""

import math

import pytest

from utils.stats_utils import average, clamp, median, percentile, round_half_up


class TestAverage:

    def test_empty_list_is_zero(self):
        assert average([]) == 0

    def test_arithmetic_mean(self):
        assert average([10, 20, 30, 40]) == 25

    def test_accepts_generators(self):
        assert average(x for x in (1, 2)) == 1.5


class TestMedian:

    def test_empty_list_is_zero(self):
        assert median([]) == 0

    def test_odd_length_returns_middle_element(self):
        assert median([3, 1, 2]) == 2

    def test_even_length_averages_middle_pair(self):
        assert median([4, 1, 3, 2]) == 2.5

    def test_single_value(self):
        assert median([100]) == 100

    def test_does_not_mutate_input(self):
        values = [3, 1, 2]
        median(values)
        assert values == [3, 1, 2]


class TestPercentile:

    def test_empty_list_is_zero(self):
        assert percentile([], 50) == 0

    def test_floor_index(self):
        values = [10, 20, 30, 40]
        assert percentile(values, 25) == 20
        assert percentile(values, 50) == 30
        assert percentile(values, 75) == 40

    def test_hundredth_percentile_is_clamped_to_last_value(self):
        assert percentile([1, 2, 3], 100) == 3


class TestRoundHalfUp:

    @pytest.mark.parametrize('value,expected', [
        (2.5, 3),
        (3.5, 4),
        (14.5, 15),
        (-2.5, -2),
        (-12.5, -12),
        (-2.6, -3),
        (2.4999, 2),
    ])
    def test_rounds_halves_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_returns_int_for_zero_places(self):
        assert isinstance(round_half_up(61.9999999), int)

    def test_two_places(self):
        assert round_half_up(2.675, 2) == 2.68
        assert round_half_up(46.75, 2) == 46.75
        assert round_half_up(-1.005, 2) == -1.0

    def test_infinity_passes_through(self):
        assert round_half_up(math.inf) == math.inf


class TestClamp:

    def test_within_range(self):
        assert clamp(50, 0, 100) == 50

    def test_bounds(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
