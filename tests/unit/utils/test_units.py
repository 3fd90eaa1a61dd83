"""
Unit tests for token unit conversion.

Usage:
    pytest tests/unit/utils/test_units.py
"""

from decimal import Decimal

import pytest

from comptoir.utils.units import format_units, to_smallest_unit


class TestToSmallestUnit:
    """Tests for to_smallest_unit."""

    def test_whole_amount_scales_by_decimals(self):
        assert to_smallest_unit(Decimal("500"), 18) == 500 * 10**18

    def test_fractional_amount_is_exact(self):
        """0.1 must not pick up float error."""
        assert to_smallest_unit(Decimal("0.1"), 18) == 10**17
        assert to_smallest_unit(Decimal("1.5"), 6) == 1_500_000

    def test_large_amount_keeps_precision(self):
        amount = Decimal("123456789012345678901234.123456789012345678")
        assert to_smallest_unit(amount, 18) == 123456789012345678901234123456789012345678

    def test_zero_decimals(self):
        assert to_smallest_unit(Decimal("42"), 0) == 42

    def test_too_many_decimal_places_rejected(self):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal("1.123"), 2)

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal("1"), -1)


class TestFormatUnits:
    """Tests for format_units."""

    def test_whole_amount_keeps_trailing_zero(self):
        assert format_units(500 * 10**18, 18) == "500.0"

    def test_fraction_strips_trailing_zeros(self):
        assert format_units(1_500_000, 6) == "1.5"

    def test_small_fraction_is_zero_padded(self):
        assert format_units(1, 18) == "0.000000000000000001"

    def test_zero(self):
        assert format_units(0, 18) == "0.0"

    def test_zero_decimals(self):
        assert format_units(42, 0) == "42.0"

    def test_format_matches_conversion(self):
        raw = to_smallest_unit(Decimal("1234.5678"), 18)
        assert format_units(raw, 18) == "1234.5678"


class TestToSmallestUnitExtremes:
    """Exponent-notation amounts are never rounded, flushed or overflowed."""

    def test_exponent_notation_scales(self):
        assert to_smallest_unit(Decimal("1e3"), 18) == 1000 * 10**18

    def test_trailing_zeros_beyond_decimals_accepted(self):
        assert to_smallest_unit(Decimal("1.10"), 1) == 11

    @pytest.mark.parametrize("amount", ["1e-19", "1e-30", "1e-2000000"])
    def test_tiny_amount_rejected_not_flushed_to_zero(self, amount):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal(amount), 18)

    @pytest.mark.parametrize("amount", ["1e60", "1e999999999"])
    def test_huge_amount_rejected(self, amount):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal(amount), 18)

    def test_largest_uint256_accepted(self):
        assert to_smallest_unit(Decimal(2**256 - 1), 0) == 2**256 - 1

    def test_just_over_uint256_rejected(self):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal(2**256), 0)

    def test_too_many_significant_digits_rejected(self):
        amount = Decimal("1." + "1" * 120)
        with pytest.raises(ValueError):
            to_smallest_unit(amount, 200)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            to_smallest_unit(Decimal("Infinity"), 18)
