"""Numeric coercion for provider attribute values.

Providers report numbers as JSON numbers, numeric strings, or not at all.
Attribute values that cannot be read as a number become NaN; fallbacks that
cannot be read as a number become 0.

.. code-block:: python

    >>> to_float("100.5")
    100.5
    >>> to_float("n/a")
    nan
    >>> fallback_to_float("n/a")
    0.0
"""

from __future__ import annotations

import math
from typing import Any


def to_float(value: Any) -> float:
    """Coerce an attribute value to float.

    :param value: Raw attribute value.
    :returns: The numeric value, or NaN if it is not numeric.
    """
    # bool is an int subclass but never a price
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def fallback_to_float(fallback: Any) -> float:
    """Coerce a caller-supplied fallback to float.

    :param fallback: Fallback value passed by the caller.
    :returns: The numeric fallback, or 0.0 if it is not numeric.
    """
    number = to_float(fallback)
    if math.isnan(number):
        return 0.0
    return number
