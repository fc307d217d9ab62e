"""
Payload validation helpers shared by the calculation services
Each helper returns a Result so services can bail out on the first failure
"""

import math
from decimal import Decimal
from typing import Any, Mapping, Optional

from services.common.result import Result

INVALID_PAYLOAD = 'INVALID_PAYLOAD'
INVALID_FIELD = 'INVALID_FIELD'
NEGATIVE_VALUE = 'NEGATIVE_VALUE'
SCORE_OUT_OF_RANGE = 'SCORE_OUT_OF_RANGE'
INVALID_PRICE_RANGE = 'INVALID_PRICE_RANGE'
TOO_MANY_VALUES = 'TOO_MANY_VALUES'


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful count or price
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, Decimal)):
        return False
    # Huge JSON integers parse as int but cannot take part in float math
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def require_mapping(payload: Any) -> Result[Mapping[str, Any]]:
    if not isinstance(payload, Mapping):
        return Result.failure("Request body must be a JSON object", code=INVALID_PAYLOAD)
    return Result.success(payload)


def parse_number(payload: Mapping[str, Any],
                 field: str,
                 default: Optional[float] = None,
                 required: bool = False,
                 allow_negative: bool = False,
                 maximum: Optional[float] = None) -> Result[Optional[float]]:
    """
    Read one numeric field from a payload.

    Args:
        payload: Request data
        field: Key to read
        default: Value used when the key is missing or null
        required: Fail when the key is missing or null
        allow_negative: Accept values below zero
        maximum: Inclusive upper bound, if any

    Returns:
        Result with the number, or a failure naming the field
    """
    value = payload.get(field)
    if value is None:
        if required:
            return Result.failure(f"{field} is required", code=INVALID_FIELD,
                                  metadata={'field': field})
        return Result.success(default)

    if not _is_number(value):
        return Result.failure(f"{field} must be a number", code=INVALID_FIELD,
                              metadata={'field': field, 'value': repr(value)})

    if not allow_negative and value < 0:
        return Result.failure(f"{field} must not be negative", code=NEGATIVE_VALUE,
                              metadata={'field': field, 'value': value})

    if maximum is not None and value > maximum:
        return Result.failure(f"{field} must be between 0 and {maximum}", code=SCORE_OUT_OF_RANGE,
                              metadata={'field': field, 'value': value})

    return Result.success(value)


def parse_count(payload: Mapping[str, Any], field: str) -> Result[int]:
    """Read a non-negative whole-number count, defaulting to 0"""
    result = parse_number(payload, field, default=0)
    if result.is_failure:
        return result
    value = result.data
    if isinstance(value, float) and not value.is_integer():
        return Result.failure(f"{field} must be a whole number", code=INVALID_FIELD,
                              metadata={'field': field, 'value': value})
    return Result.success(int(value))


def parse_price_list(payload: Mapping[str, Any], field: str, max_length: int) -> Result[tuple]:
    """Read a list of non-negative prices; missing or null means empty"""
    values = payload.get(field)
    if values is None:
        return Result.success(())
    if not isinstance(values, (list, tuple)):
        return Result.failure(f"{field} must be a list of numbers", code=INVALID_FIELD,
                              metadata={'field': field})
    if len(values) > max_length:
        return Result.failure(f"{field} accepts at most {max_length} values", code=TOO_MANY_VALUES,
                              metadata={'field': field, 'length': len(values)})

    prices = []
    for index, value in enumerate(values):
        if not _is_number(value):
            return Result.failure(f"{field}[{index}] must be a number", code=INVALID_FIELD,
                                  metadata={'field': field, 'index': index})
        if value < 0:
            return Result.failure(f"{field}[{index}] must not be negative", code=NEGATIVE_VALUE,
                                  metadata={'field': field, 'index': index})
        prices.append(float(value))
    return Result.success(tuple(prices))
