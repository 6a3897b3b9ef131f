# ============================================================================
# Tests for the procedure parameter encoder
# ============================================================================
"""Unit tests for ParameterEncoder.

Verifies:
- Ruleset ordering and determinism
- NULL handling for omitted parameters and literals
- Quoting and escaping of strings, arrays and numerals
"""

from decimal import Decimal

import pytest

from donorperfect.protocol.coercion import LiteralParam, ParameterRule, ParamKind
from donorperfect.protocol.exceptions import ValidationError
from donorperfect.protocol.param_encoder import QUOTED_PARAMETERS, ParameterEncoder


@pytest.fixture
def encoder() -> ParameterEncoder:
    return ParameterEncoder()


class TestEncode:
    """Tests for ParameterEncoder.encode."""

    def test_follows_ruleset_order(self, encoder) -> None:
        """Should emit parameters in ruleset order regardless of data order."""
        ruleset = {
            "donor_id": ParameterRule(ParamKind.NUMERIC),
            "last_name": ParameterRule(ParamKind.STRING, 75),
        }
        data = {"last_name": "Smith", "donor_id": "7"}
        assert encoder.encode(ruleset, data) == "@donor_id=7,@last_name='Smith'"

    def test_is_deterministic(self, encoder) -> None:
        """Should produce byte-identical output for identical input."""
        ruleset = {"a": ParameterRule(ParamKind.STRING), "b": ParameterRule(ParamKind.MONEY)}
        data = {"a": "x", "b": "1"}
        assert encoder.encode(ruleset, data) == encoder.encode(ruleset, dict(data))

    def test_omitted_and_none_are_null(self, encoder) -> None:
        """Should send NULL for missing keys and None values."""
        ruleset = {
            "donor_id": ParameterRule(ParamKind.NUMERIC),
            "email": ParameterRule(ParamKind.STRING, 75),
        }
        assert encoder.encode(ruleset, {"email": None}) == "@donor_id=NULL,@email=NULL"

    def test_empty_string_is_null(self, encoder) -> None:
        """Should send NULL for strings that are empty after trimming."""
        ruleset = {"city": ParameterRule(ParamKind.STRING, 50), "donor_id": ParameterRule(ParamKind.NUMERIC)}
        assert encoder.encode(ruleset, {"city": "   ", "donor_id": ""}) == "@city=NULL,@donor_id=NULL"

    def test_blank_money_is_zero(self, encoder) -> None:
        """Should send 0.00 for blank money values but NULL for omitted ones."""
        ruleset = {"total": ParameterRule(ParamKind.MONEY), "bill": ParameterRule(ParamKind.MONEY)}
        assert encoder.encode(ruleset, {"bill": ""}) == "@total=NULL,@bill=0.00"

    def test_literals_bypass_coercion(self, encoder) -> None:
        """Should serialize literals without reading the data."""
        ruleset = {
            "gift_type": LiteralParam("SN"),
            "filter_id": LiteralParam(None),
            "user_id": LiteralParam("my-app"),
        }
        data = {"gift_type": "XX", "filter_id": "3"}
        assert encoder.encode(ruleset, data) == "@gift_type='SN',@filter_id=NULL,@user_id='my-app'"

    def test_escapes_strings(self, encoder) -> None:
        """Should double quotes and encode percent signs."""
        ruleset = {"last_name": ParameterRule(ParamKind.STRING, 75)}
        assert encoder.encode(ruleset, {"last_name": "O'Brien 50%"}) == "@last_name='O''Brien 50%25'"

    def test_propagates_validation_errors(self, encoder) -> None:
        """Should raise ValidationError for values that fail coercion."""
        ruleset = {"state": ParameterRule(ParamKind.STRING, 2)}
        with pytest.raises(ValidationError):
            encoder.encode(ruleset, {"state": "Texas"})

    def test_money_and_bool(self, encoder) -> None:
        """Should emit money bare and booleans as 1/0."""
        ruleset = {
            "amount": ParameterRule(ParamKind.MONEY),
            "ActiveFlg": ParameterRule(ParamKind.BOOL),
            "IsDefault": ParameterRule(ParamKind.BOOL),
        }
        data = {"amount": "25", "ActiveFlg": True, "IsDefault": 0}
        assert encoder.encode(ruleset, data) == "@amount=25.00,@ActiveFlg=1,@IsDefault=0"

    def test_array_items_are_pipe_joined(self, encoder) -> None:
        """Should emit arrays as N'a|b' with escaped items."""
        ruleset = {"recipients": ParameterRule(ParamKind.ARRAY)}
        assert encoder.encode(ruleset, {"recipients": [12, "O'Neil", "5%"]}) == "@recipients=N'12|O''Neil|5%25'"

    def test_numeric_looking_string_is_bare(self, encoder) -> None:
        """Should emit numerals bare even when declared as strings."""
        ruleset = {"zip": ParameterRule(ParamKind.STRING, 20)}
        assert encoder.encode(ruleset, {"zip": "02134"}) == "@zip=02134"


class TestSerializeValue:
    """Tests for single value serialization."""

    def test_plus_sign_is_quoted(self, encoder) -> None:
        """Should quote numerals carrying a '+' sign."""
        assert encoder.serialize_value("phone", "+15551234") == "'+15551234'"

    def test_exponent_is_quoted(self, encoder) -> None:
        """Should quote exponent notation."""
        assert encoder.serialize_value("code", "1e5") == "'1e5'"

    def test_double_quotes_are_removed(self, encoder) -> None:
        """Should strip double quotes from strings."""
        assert encoder.serialize_value("title", 'The "Boss"') == "'The Boss'"

    def test_decimal_is_bare(self, encoder) -> None:
        """Should emit Decimal values in plain notation."""
        assert encoder.serialize_value("donor_id", Decimal("147")) == "147"

    def test_quoted_parameters_keep_quotes(self, encoder) -> None:
        """Should quote numeric-looking values of parameters with significant zeros."""
        assert "CardExpirationDate" in QUOTED_PARAMETERS
        assert encoder.serialize_value("CardExpirationDate", "0825") == "'0825'"


class TestSerializeParams:
    """Tests for serialize_params."""

    def test_preserves_mapping_order(self, encoder) -> None:
        """Should join already-coerced values in mapping order."""
        values = {"Gift_ID": 12, "TributeID_List": "3,4", "Level": None}
        assert encoder.serialize_params(values) == "@Gift_ID=12,@TributeID_List='3,4',@Level=NULL"

    def test_empty_mapping(self, encoder) -> None:
        """Should return an empty string when there are no parameters."""
        assert encoder.serialize_params({}) == ""
