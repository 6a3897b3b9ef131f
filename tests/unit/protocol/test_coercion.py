# ============================================================================
# Tests for parameter value coercion
# ============================================================================
"""Unit tests for value coercion.

Tests trimming, length limits, numeral validation and money formatting.
"""

from decimal import Decimal

import pytest

from donorperfect.protocol.coercion import (
    ParameterRule,
    ParamKind,
    coerce,
    coerce_array,
    coerce_bool,
    coerce_date,
    coerce_money,
    coerce_numeric,
    coerce_string,
)
from donorperfect.protocol.exceptions import ValidationError


class TestCoerceString:
    """Tests for coerce_string."""

    def test_trims_whitespace(self) -> None:
        """Should trim surrounding whitespace."""
        assert coerce_string("  Mary \n") == "Mary"

    def test_accepts_value_at_max_length(self) -> None:
        """Should accept a trimmed value of exactly max_length characters."""
        assert coerce_string(" abc ", 3) == "abc"

    def test_rejects_value_over_max_length(self) -> None:
        """Should raise ValidationError naming the field."""
        with pytest.raises(ValidationError) as exc_info:
            coerce_string("abcd", 3, field="state")
        assert exc_info.value.field == "state"
        assert exc_info.value.error_code == "VALIDATION_ERROR"

    def test_does_not_escape(self) -> None:
        """Should leave quotes and percent signs untouched."""
        assert coerce_string("O'Brien 50%") == "O'Brien 50%"

    def test_non_string_input(self) -> None:
        """Should stringify non-string values."""
        assert coerce_string(42) == "42"


class TestCoerceNumeric:
    """Tests for coerce_numeric."""

    @pytest.mark.parametrize("value", ["12", "-3", "0.5", ".5", "12.", " 7 ", 12, 1.5])
    def test_accepts_decimal_numerals(self, value) -> None:
        """Should accept plain decimal numerals."""
        assert isinstance(coerce_numeric(value), Decimal)

    def test_preserves_digits(self) -> None:
        """Should not reformat the numeral."""
        assert coerce_numeric("0012.50") == Decimal("0012.50")

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_is_none(self, value) -> None:
        """Should return None for empty input."""
        assert coerce_numeric(value) is None

    @pytest.mark.parametrize("value", ["1e5", "2E3", "abc", "1,000", "12-3", "--1"])
    def test_rejects_non_numerals(self, value) -> None:
        """Should raise ValidationError for exponents and non-numerals."""
        with pytest.raises(ValidationError):
            coerce_numeric(value)

    def test_rejects_bool(self) -> None:
        """Should not treat booleans as numbers."""
        with pytest.raises(ValidationError):
            coerce_numeric(True)


class TestCoerceMoney:
    """Tests for coerce_money."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("12.5", "12.50"),
            ("1234567", "1234567.00"),
            ("0.005", "0.01"),
            ("2.675", "2.68"),
            ("-4.1", "-4.10"),
            (Decimal("0.0000001"), "0.00"),
        ],
    )
    def test_formats_two_decimals(self, value, expected) -> None:
        """Should round half-up to two decimals without separators."""
        assert coerce_money(value) == expected

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_is_zero(self, value) -> None:
        """Should format blank input as zero."""
        assert coerce_money(value) == "0.00"

    def test_rejects_exponent(self) -> None:
        """Should reject the same inputs as coerce_numeric."""
        with pytest.raises(ValidationError):
            coerce_money("1e2")


class TestCoerceOtherKinds:
    """Tests for date, bool and array coercion."""

    def test_date_is_pass_through(self) -> None:
        """Should return date text unchanged."""
        assert coerce_date("01/31/2024") == "01/31/2024"

    def test_bool_uses_truthiness(self) -> None:
        """Should map truthy and falsy values to bool."""
        assert coerce_bool(1) is True
        assert coerce_bool("") is False

    def test_array_accepts_list_and_tuple(self) -> None:
        """Should pass lists and tuples through."""
        assert coerce_array([1, 2]) == [1, 2]
        assert coerce_array(("a",)) == ("a",)

    def test_array_rejects_string(self) -> None:
        """Should reject strings even though they are iterable."""
        with pytest.raises(ValidationError, match="not a valid array"):
            coerce_array("a|b")


class TestCoerceDispatch:
    """Tests for rule-based dispatch."""

    def test_string_rule_uses_max_length(self) -> None:
        """Should apply the rule's max_length."""
        with pytest.raises(ValidationError):
            coerce(ParameterRule(ParamKind.STRING, 2), "abc", "code")

    def test_money_rule(self) -> None:
        """Should dispatch MONEY to coerce_money."""
        assert coerce(ParameterRule(ParamKind.MONEY), "3") == "3.00"

    def test_every_kind_is_dispatchable(self) -> None:
        """Should have a coercion for every ParamKind."""
        samples = {
            ParamKind.STRING: "x",
            ParamKind.NUMERIC: "1",
            ParamKind.MONEY: "1",
            ParamKind.DATE: "01/01/2024",
            ParamKind.DATETIME: "01/01/2024 10:00",
            ParamKind.BOOL: 0,
            ParamKind.ARRAY: [],
        }
        for kind in ParamKind:
            coerce(ParameterRule(kind), samples[kind])
