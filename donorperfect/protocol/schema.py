# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Column catalogue of DonorPerfect tables.
# ============================================================================
"""Table Schema.

Static column definitions for DonorPerfect tables, used to validate values
before they are inlined into SQL actions.

Usage:
    schema = get_schema("dp")
    rule = schema.column("email").to_rule()  # string rule, max 75
"""

from dataclasses import dataclass

from .coercion import ParameterRule, ParamKind

# nvarchar(max)
UNBOUNDED = -1

_KIND_BY_TYPE: dict[str, ParamKind] = {
    "nvarchar": ParamKind.STRING,
    "nchar": ParamKind.STRING,
    "numeric": ParamKind.NUMERIC,
    "bigint": ParamKind.NUMERIC,
    "money": ParamKind.MONEY,
    "datetime": ParamKind.DATETIME,
}


@dataclass(frozen=True)
class ColumnSchema:
    """Column definition.

    Attributes:
        name: Column name as stored remotely.
        type: SQL Server type name.
        max_chars: Maximum characters for text columns, UNBOUNDED for max.
        nullable: Whether the column accepts NULL.
    """

    name: str
    type: str
    max_chars: int | None = None
    nullable: bool = True

    def to_rule(self) -> ParameterRule:
        """Build the coercion rule matching this column."""
        kind = _KIND_BY_TYPE[self.type]
        if kind is ParamKind.STRING and self.max_chars not in (None, UNBOUNDED):
            return ParameterRule(kind, self.max_chars)
        return ParameterRule(kind)


@dataclass(frozen=True)
class TableSchema:
    name: str
    columns: tuple[ColumnSchema, ...]

    def column(self, name: str) -> ColumnSchema | None:
        """Find a column by name, case-insensitively."""
        wanted = name.lower()
        for column in self.columns:
            if column.name.lower() == wanted:
                return column
        return None

    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]


_DP = TableSchema(
    "DP",
    (
        ColumnSchema("donor_id", "numeric", None, False),
        ColumnSchema("first_name", "nvarchar", 50, True),
        ColumnSchema("last_name", "nvarchar", 75, False),
        ColumnSchema("middle_name", "nvarchar", 50, True),
        ColumnSchema("suffix", "nvarchar", 50, True),
        ColumnSchema("title", "nvarchar", 50, True),
        ColumnSchema("salutation", "nvarchar", 130, True),
        ColumnSchema("prof_title", "nvarchar", 100, True),
        ColumnSchema("opt_line", "nvarchar", 100, True),
        ColumnSchema("address", "nvarchar", 100, True),
        ColumnSchema("address2", "nvarchar", 100, True),
        ColumnSchema("city", "nvarchar", 50, True),
        ColumnSchema("state", "nvarchar", 30, True),
        ColumnSchema("zip", "nvarchar", 20, True),
        ColumnSchema("country", "nvarchar", 30, True),
        ColumnSchema("address_type", "nvarchar", 30, True),
        ColumnSchema("home_phone", "nvarchar", 40, True),
        ColumnSchema("business_phone", "nvarchar", 40, True),
        ColumnSchema("fax_phone", "nvarchar", 40, True),
        ColumnSchema("mobile_phone", "nvarchar", 40, True),
        ColumnSchema("email", "nvarchar", 75, True),
        ColumnSchema("org_rec", "nvarchar", 1, True),
        ColumnSchema("donor_type", "nvarchar", 30, True),
        ColumnSchema("nomail", "nvarchar", 1, False),
        ColumnSchema("nomail_reason", "nvarchar", 30, True),
        ColumnSchema("narrative", "nvarchar", UNBOUNDED, True),
        ColumnSchema("tag_date", "datetime", None, True),
        ColumnSchema("initial_gift_date", "datetime", None, True),
        ColumnSchema("last_contrib_date", "datetime", None, True),
        ColumnSchema("last_contrib_amt", "money", None, True),
        ColumnSchema("ytd", "money", None, True),
        ColumnSchema("ly_ytd", "money", None, True),
        ColumnSchema("ly2_ytd", "money", None, True),
        ColumnSchema("ly3_ytd", "money", None, True),
        ColumnSchema("ly4_ytd", "money", None, True),
        ColumnSchema("ly5_ytd", "money", None, True),
        ColumnSchema("ly6_ytd", "money", None, True),
        ColumnSchema("cytd", "money", None, True),
        ColumnSchema("ly_cytd", "money", None, True),
        ColumnSchema("ly2_cytd", "money", None, True),
        ColumnSchema("ly3_cytd", "money", None, True),
        ColumnSchema("ly4_cytd", "money", None, True),
        ColumnSchema("ly5_cytd", "money", None, True),
        ColumnSchema("ly6_cytd", "money", None, True),
        ColumnSchema("autocalc1", "money", None, True),
        ColumnSchema("autocalc2", "money", None, True),
        ColumnSchema("autocalc3", "money", None, True),
        ColumnSchema("gift_total", "money", None, True),
        ColumnSchema("gifts", "numeric", None, True),
        ColumnSchema("max_date", "datetime", None, True),
        ColumnSchema("max_amt", "money", None, True),
        ColumnSchema("avg_amt", "money", None, True),
        ColumnSchema("yrs_donated", "numeric", None, True),
        ColumnSchema("created_by", "nvarchar", 20, True),
        ColumnSchema("created_date", "datetime", None, True),
        ColumnSchema("modified_by", "nvarchar", 20, True),
        ColumnSchema("modified_date", "datetime", None, True),
        ColumnSchema("donor_rcpt_type", "nchar", 1, True),
        ColumnSchema("address3", "nvarchar", 100, True),
        ColumnSchema("address4", "nvarchar", 100, True),
        ColumnSchema("ukcounty", "nvarchar", 100, True),
        ColumnSchema("gift_aid_eligible", "nchar", 1, True),
        ColumnSchema("initial_temp_record_id", "numeric", None, True),
        ColumnSchema("frequent_temp_record_id", "numeric", None, True),
        ColumnSchema("recent_temp_record_id", "numeric", None, True),
        ColumnSchema("import_id", "numeric", None, True),
        ColumnSchema("receipt_delivery", "nvarchar", 1, True),
        ColumnSchema("no_email", "nvarchar", 1, True),
        ColumnSchema("no_email_reason", "nvarchar", 200, True),
        ColumnSchema("email_type", "nvarchar", 20, True),
        ColumnSchema("email_status", "nvarchar", 50, True),
        ColumnSchema("email_status_date", "datetime", None, True),
        ColumnSchema("opt_out_source", "nvarchar", 200, True),
        ColumnSchema("opt_out_reason", "nvarchar", 200, True),
        ColumnSchema("CC_donor_import_time", "datetime", None, True),
        ColumnSchema("cc_contact_id", "bigint", None, True),
        ColumnSchema("wl_import_id", "numeric", None, True),
        ColumnSchema("WL_Action", "nchar", 1, True),
        ColumnSchema("geocoding_lattitude", "nvarchar", 100, True),
        ColumnSchema("geocoding_longitude", "nvarchar", 100, True),
        ColumnSchema("quickbooks_customer_id", "nvarchar", 20, True),
    ),
)

_SCHEMAS: dict[str, TableSchema] = {_DP.name: _DP}


def get_schema(table: str) -> TableSchema | None:
    """Get the schema of a table.

    Args:
        table: Table name, any case.

    Returns:
        TableSchema or None if the table is not catalogued.
    """
    return _SCHEMAS.get(table.upper())
