"""
Numeric helpers shared by the demand estimation services.

All helpers accept plain Python numbers (ints, floats or Decimals) and
return plain numbers. Empty inputs degrade to 0 rather than raising, so
callers never have to guard against an empty list of price ceilings.
"""

import math
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Iterable, List, Union

Number = Union[int, float, Decimal]


def _as_sorted_floats(numbers: Iterable[Number]) -> List[float]:
    return sorted(float(n) for n in numbers)


def average(numbers: Iterable[Number]) -> float:
    """
    Arithmetic mean of a list of numbers.

    Args:
        numbers: Values to average

    Returns:
        The mean, or 0 for an empty input
    """
    values = [float(n) for n in numbers]
    if not values:
        return 0
    return sum(values) / len(values)


def median(numbers: Iterable[Number]) -> float:
    """
    Median of a list of numbers.

    Odd-length inputs return the middle element; even-length inputs return
    the mean of the two middle elements.

    Args:
        numbers: Values to summarize

    Returns:
        The median, or 0 for an empty input
    """
    ordered = _as_sorted_floats(numbers)
    if not ordered:
        return 0

    middle = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def percentile(numbers: Iterable[Number], pct: float) -> float:
    """
    Floor-index percentile: ``sorted[floor(len * pct / 100)]``.

    Args:
        numbers: Values to summarize
        pct: Percentile between 0 and 100

    Returns:
        The value at the percentile, or 0 for an empty input
    """
    ordered = _as_sorted_floats(numbers)
    if not ordered:
        return 0

    index = int(math.floor(len(ordered) * pct / 100.0))
    return ordered[min(max(index, 0), len(ordered) - 1)]


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Constrain value to the closed range [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: Number, places: int = 0) -> Union[int, float]:
    """
    Round halves towards positive infinity instead of Python's banker's
    rounding, matching JavaScript's Math.round.

    ``round_half_up(2.5) == 3``, ``round_half_up(-2.5) == -2`` and
    ``round_half_up(2.675, 2) == 2.68``.

    Args:
        value: Number to round
        places: Decimal places to keep

    Returns:
        An int when places is 0, otherwise a float
    """
    if isinstance(value, float) and not math.isfinite(value):
        return value

    exponent = Decimal(1).scaleb(-places)
    decimal_value = Decimal(str(value))
    # Halves go up for positive values and towards zero for negative ones
    rounding = ROUND_HALF_UP if decimal_value >= 0 else ROUND_HALF_DOWN
    rounded = decimal_value.quantize(exponent, rounding=rounding)
    if places == 0:
        return int(rounded)
    return float(rounded)
