"""Unit tests for the table schema catalogue."""

from donorperfect.protocol.coercion import ParameterRule, ParamKind
from donorperfect.protocol.schema import UNBOUNDED, get_schema


class TestGetSchema:
    """Tests for get_schema."""

    def test_lookup_is_case_insensitive(self) -> None:
        """Should find the DP table by any case."""
        assert get_schema("dp") is get_schema("DP")

    def test_unknown_table(self) -> None:
        """Should return None for tables without a catalogue entry."""
        assert get_schema("DPGIFT") is None

    def test_dp_columns(self) -> None:
        """Should carry the DP column definitions."""
        schema = get_schema("DP")
        donor_id = schema.column("donor_id")
        assert donor_id.type == "numeric"
        assert donor_id.nullable is False
        assert schema.column("EMAIL").max_chars == 75
        assert schema.column("narrative").max_chars == UNBOUNDED
        assert schema.column("missing") is None
        assert schema.column_names()[0] == "donor_id"


class TestColumnRules:
    """Tests for ColumnSchema.to_rule."""

    def test_text_column_rule(self) -> None:
        """Should map nvarchar columns to length-limited string rules."""
        assert get_schema("DP").column("last_name").to_rule() == ParameterRule(ParamKind.STRING, 75)

    def test_unbounded_text_column_rule(self) -> None:
        """Should not limit nvarchar(max) columns."""
        assert get_schema("DP").column("narrative").to_rule() == ParameterRule(ParamKind.STRING)

    def test_typed_column_rules(self) -> None:
        """Should map numeric, money and datetime columns to their kinds."""
        schema = get_schema("DP")
        assert schema.column("cc_contact_id").to_rule().kind is ParamKind.NUMERIC
        assert schema.column("ytd").to_rule().kind is ParamKind.MONEY
        assert schema.column("tag_date").to_rule().kind is ParamKind.DATETIME
