"""Unit tests for numeric coercion."""

import math

import pytest

from tickers.src.coercion import fallback_to_float, to_float


class TestToFloat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, 1.0),
            (2.5, 2.5),
            ("100.5", 100.5),
            (" 7 ", 7.0),
            ("1e3", 1000.0),
        ],
    )
    def test_numeric(self, value, expected) -> None:
        assert to_float(value) == expected

    @pytest.mark.parametrize("value", [None, "", "n/a", "$1", True, {"USD": 1}, [1]])
    def test_non_numeric_is_nan(self, value) -> None:
        assert math.isnan(to_float(value))

    def test_integer_beyond_float_range(self) -> None:
        assert to_float(10**400) == math.inf
        assert to_float(-(10**400)) == -math.inf


class TestFallbackToFloat:
    def test_numeric_fallback(self) -> None:
        assert fallback_to_float(5) == 5.0
        assert fallback_to_float("3.25") == 3.25

    @pytest.mark.parametrize("value", [None, "none", False, math.nan])
    def test_non_numeric_is_zero(self, value) -> None:
        assert fallback_to_float(value) == 0.0

    def test_huge_integer_fallback(self) -> None:
        assert fallback_to_float(10**400) == math.inf
