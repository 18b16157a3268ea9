"""Tests for amount parsing and formatting"""

import pytest
from lib.amount_parser import parse_amount, format_amount, format_number


class TestParseAmount:
    """Tests for free-text amount parsing"""

    def test_whole_number(self):
        assert parse_amount("3") == 3

    def test_decimal(self):
        assert parse_amount("1.5") == 1.5

    def test_simple_fraction(self):
        assert parse_amount("1/2") == 0.5

    def test_mixed_number(self):
        assert parse_amount("2 1/4") == 2.25

    @pytest.mark.parametrize("n,d", [(1, 3), (3, 4), (7, 8), (5, 2)])
    def test_fraction_equals_quotient(self, n, d):
        assert parse_amount(f"{n}/{d}") == pytest.approx(n / d)

    def test_empty_defaults_to_one(self):
        """Empty amount counts as one unit, not zero"""
        assert parse_amount("") == 1
        assert parse_amount("   ") == 1

    def test_none_defaults_to_one(self):
        assert parse_amount(None) == 1

    def test_unparsable_defaults_to_one(self):
        assert parse_amount("a pinch") == 1
        assert parse_amount("to taste") == 1

    def test_zero_denominator_skipped(self):
        """Bad fraction contributes nothing, other tokens still count"""
        assert parse_amount("2 1/0") == 2
        assert parse_amount("1/0") == 1

    def test_missing_denominator_skipped(self):
        assert parse_amount("3 1/") == 3

    def test_extra_slash_uses_first_two_parts(self):
        """"1/2/3" reads as 1/2"""
        assert parse_amount("1/2/3") == 0.5

    def test_non_finite_tokens_skipped(self):
        assert parse_amount("nan") == 1
        assert parse_amount("2 inf") == 2
        assert parse_amount("1e400") == 1

    def test_unicode_fraction(self):
        assert parse_amount("½") == 0.5
        assert parse_amount("1½") == 1.5
        assert parse_amount("2 ¾") == 2.75

    def test_ignores_words_mixed_with_numbers(self):
        assert parse_amount("about 2") == 2


class TestFormatAmount:
    """Tests for display formatting"""

    def test_integer_has_no_decimal_point(self):
        assert format_amount(4.0) == "4"
        assert format_amount(1.0) == "1"

    def test_zero(self):
        assert format_amount(0) == "0"

    def test_common_fractions(self):
        assert format_amount(0.5) == "1/2"
        assert format_amount(0.25) == "1/4"
        assert format_amount(0.75) == "3/4"
        assert format_amount(1 / 3) == "1/3"

    def test_mixed_fraction(self):
        assert format_amount(1.5) == "1 1/2"
        assert format_amount(2.25) == "2 1/4"

    def test_near_fraction_snaps(self):
        assert format_amount(0.66) == "2/3"

    def test_other_decimals_rounded(self):
        assert format_amount(0.93) == "0.93"
        assert format_amount(2.06) == "2.1"

    def test_close_to_integer(self):
        assert format_amount(2.98) == "3"

    def test_negative_keeps_sign_on_whole_part(self):
        assert format_amount(-1.5) == "-1 1/2"
        assert format_amount(-0.25) == "-1/4"
        assert format_amount(-2.0) == "-2"

    def test_non_finite(self):
        assert format_amount(float("inf")) == "inf"
        assert format_number(float("nan")) == "nan"


class TestFormatNumber:
    def test_strips_trailing_zero(self):
        assert format_number(8.0) == "8"
        assert format_number(1.5) == "1.5"
        assert format_number(2.25) == "2.25"
