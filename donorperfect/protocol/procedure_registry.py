# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Stored procedure registry.
# ============================================================================
"""Procedure Registry.

Extensible registry of DonorPerfect stored procedures and their parameter
rules. Allows adding new procedures without modifying the client class.

Rule sets are ordered: the declared order is the order the parameters are
sent in, which the remote procedures rely on.

Usage:
    registry = create_default_registry("my-app")
    config = registry.get("dp_gifts")
    params = ParameterEncoder().encode(config.rules, config.prepare({"donor_id": 7}))
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .coercion import LiteralParam, ParameterRule, ParamKind

NUMERIC = ParameterRule(ParamKind.NUMERIC)
MONEY = ParameterRule(ParamKind.MONEY)
DATE = ParameterRule(ParamKind.DATE)
DATETIME = ParameterRule(ParamKind.DATETIME)
BOOL = ParameterRule(ParamKind.BOOL)
ARRAY = ParameterRule(ParamKind.ARRAY)
NULL_PARAM = LiteralParam(None)


def string(max_length: int | None = None) -> ParameterRule:
    """String rule with an optional maximum length."""
    return ParameterRule(ParamKind.STRING, max_length)


RuleSet = Mapping[str, ParameterRule | LiteralParam]
DataTransformer = Callable[[dict[str, Any]], dict[str, Any]]


@dataclass
class ProcedureConfig:
    """Configuration for a stored procedure.

    Attributes:
        action: Remote procedure name sent as the ``action`` field.
        rules: Ordered parameter rules and literals.
        data_transformer: Optional function applied to the input data first.
    """

    action: str
    rules: RuleSet = field(default_factory=dict)
    data_transformer: DataTransformer | None = None

    def prepare(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Copy input data and apply the transformer, if any."""
        prepared = dict(data)
        if self.data_transformer:
            prepared = self.data_transformer(prepared)
        return prepared


class ProcedureRegistry:
    """Registry of procedure configurations."""

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._procedures: dict[str, ProcedureConfig] = {}

    def register(
        self,
        name: str,
        rules: RuleSet,
        action: str | None = None,
        data_transformer: DataTransformer | None = None,
    ) -> "ProcedureRegistry":
        """Register a procedure.

        Args:
            name: Registry name (usually the procedure name).
            rules: Ordered parameter rules.
            action: Remote action name, defaults to name.
            data_transformer: Optional input data transformer.

        Returns:
            Self for method chaining.
        """
        self._procedures[name] = ProcedureConfig(
            action=action or name,
            rules=dict(rules),
            data_transformer=data_transformer,
        )
        return self

    def get(self, name: str) -> ProcedureConfig:
        """Get procedure configuration.

        Raises:
            KeyError: If procedure not registered.
        """
        if name not in self._procedures:
            raise KeyError(f"Procedure '{name}' not registered in registry")
        return self._procedures[name]

    def has(self, name: str) -> bool:
        """Check if procedure is registered."""
        return name in self._procedures

    def list_procedures(self) -> list[str]:
        """List all registered procedure names."""
        return list(self._procedures.keys())


def _savedonor_defaults(data: dict[str, Any]) -> dict[str, Any]:
    # nomail is required by dp_savedonor and only accepts Y/N
    nomail = "Y" if data.get("nomail") == "Y" else "N"
    receipt_delivery = data.get("receipt_delivery")
    if receipt_delivery is None:
        receipt_delivery = "L"
    return {**data, "nomail": nomail, "receipt_delivery": receipt_delivery}


def create_default_registry(app_name: str) -> ProcedureRegistry:
    """Create registry with the standard DonorPerfect procedures.

    Args:
        app_name: Value sent as ``user_id`` for audit fields.

    Returns:
        ProcedureRegistry with all supported procedures.
    """
    registry = ProcedureRegistry()
    user_id = LiteralParam(app_name)

    # ==========================================================================
    # Donors
    # ==========================================================================
    registry.register(
        "dp_donorsearch",
        {
            "donor_id": NUMERIC,
            "last_name": string(75),
            "first_name": string(50),
            "opt_line": string(100),
            "address": string(100),
            "city": string(50),
            "state": string(30),
            "zip": string(20),
            "country": string(30),
            "filter_id": NULL_PARAM,
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_savedonor",
        {
            "donor_id": NUMERIC,
            "first_name": string(50),
            "last_name": string(75),
            "middle_name": string(50),
            "suffix": string(50),
            "title": string(50),
            "salutation": string(130),
            "prof_title": string(100),
            "opt_line": string(100),
            "address": string(100),
            "address2": string(100),
            "city": string(50),
            "state": string(30),
            "zip": string(20),
            "country": string(30),
            "address_type": string(30),
            "home_phone": string(40),
            "business_phone": string(40),
            "fax_phone": string(40),
            "mobile_phone": string(40),
            "email": string(75),
            "org_rec": string(1),
            "donor_type": string(30),
            "nomail": string(1),
            "nomail_reason": string(30),
            "narrative": string(2147483647),
            "donor_rcpt_type": string(1),
            "receipt_delivery": string(1),
            "user_id": user_id,
        },
        data_transformer=_savedonor_defaults,
    )

    # ==========================================================================
    # Gifts and pledges
    # ==========================================================================
    registry.register("dp_gifts", {"donor_id": NUMERIC})
    registry.register(
        "dp_savegift",
        {
            "gift_id": NUMERIC,
            "donor_id": NUMERIC,
            "record_type": string(1),
            "gift_date": DATE,
            "amount": MONEY,
            "gl_code": string(30),
            "solicit_code": string(30),
            "sub_solicit_code": string(30),
            "campaign": string(30),
            "gift_type": string(30),
            "split_gift": string(1),
            "pledge_payment": string(1),
            "reference": string(100),
            "transaction_id": NUMERIC,
            "memory_honor": string(30),
            "gfname": string(50),
            "glname": string(75),
            "fmv": MONEY,
            "batch_no": NUMERIC,
            "gift_narrative": string(4000),
            "ty_letter_no": string(30),
            "glink": NUMERIC,
            "plink": NUMERIC,
            "nocalc": string(1),
            "receipt": string(1),
            "old_amount": MONEY,
            "user_id": user_id,
            "gift_aid_date": DATETIME,
            "gift_aid_amt": MONEY,
            "gift_aid_eligible_g": string(1),
            "currency": string(3),
            "receipt_delivery_g": string(1),
            "acknowledgepref": string(3),
        },
    )
    registry.register(
        "dp_savepledge",
        {
            "gift_id": NUMERIC,
            "donor_id": NUMERIC,
            "gift_date": DATE,
            "start_date": DATE,
            "total": MONEY,
            "bill": MONEY,
            "frequency": string(30),
            "reminder": string(1),
            "gl_code": string(30),
            "solicit_code": string(30),
            "initial_payment": string(1),
            "sub_solicit_code": string(30),
            "writeoff_amount": MONEY,
            "writeoff_date": DATETIME,
            "user_id": user_id,
            "campaign": string(30),
            "membership_type": string(30),
            "membership_level": string(30),
            "membership_enr_date": DATETIME,
            "membership_exp_date": DATETIME,
            "membership_link_ID": NUMERIC,
            "address_id": NUMERIC,
            "gift_narrative": string(4000),
            "ty_letter_no": string(30),
            "vault_id": NUMERIC,
            "receipt_delivery_g": string(1),
            "contact_id": NUMERIC,
            "acknowledgepref": string(3),
            "currency": string(3),
        },
    )

    # ==========================================================================
    # Contacts, other info and addresses
    # ==========================================================================
    registry.register(
        "dp_savecontact",
        {
            "contact_id": NUMERIC,
            "donor_id": NUMERIC,
            "activity_code": string(30),
            "mailing_code": string(30),
            "by_whom": string(30),
            "contact_date": DATE,
            "due_date": DATE,
            "due_time": string(20),
            "completed_date": DATE,
            "comment": string(4000),
            "document_path": string(200),
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_saveotherinfo",
        {
            "other_id": NUMERIC,
            "donor_id": NUMERIC,
            "other_date": DATE,
            "comments": string(4000),
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_saveaddress",
        {
            "address_id": NUMERIC,
            "donor_id": NUMERIC,
            "opt_line": string(100),
            "address": string(100),
            "address2": string(100),
            "city": string(50),
            "state": string(30),
            "zip": string(20),
            "country": string(30),
            "address_type": string(30),
            "getmail": string(1),
            "user_id": user_id,
            "title": string(50),
            "first_name": string(50),
            "middle_name": string(50),
            "last_name": string(75),
            "suffix": string(50),
            "prof_title": string(100),
            "salutation": string(130),
            "seasonal_from_date": string(4),
            "seasonal_to_date": string(4),
            "email": string(75),
            "home_phone": string(40),
            "business_phone": string(40),
            "fax_phone": string(40),
            "mobile_phone": string(40),
            "address3": string(100),
            "address4": string(100),
            "ukcountry": string(100),
            "org_rec": string(1),
        },
    )

    # ==========================================================================
    # User defined fields, codes and links
    # ==========================================================================
    registry.register(
        "dp_save_udf_xml",
        {
            "matching_id": NUMERIC,
            "field_name": string(20),
            "data_type": string(1),
            "char_value": string(2000),
            "date_value": DATE,
            "number_value": NUMERIC,
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_savecode",
        {
            "field_name": string(20),
            "code": string(30),
            "description": string(100),
            "original_code": string(20),
            "code_date": DATE,
            "mcat_hi": MONEY,
            "mcat_lo": MONEY,
            "mcat_gl": string(1),
            "acct_num": string(30),
            "campaign": string(30),
            "solicit_code": string(30),
            "overwrite": NULL_PARAM,
            "inactive": string(1),
            "client_id": NULL_PARAM,
            "available_for_sol": NULL_PARAM,
            "user_id": user_id,
            "cashact": NULL_PARAM,
            "membership_type": NULL_PARAM,
            "leeway_days": NULL_PARAM,
            "comments": string(2000),
            "begin_date": DATE,
            "end_date": DATE,
            "ty_prioritize": string(1),
            "ty_filter_id": NULL_PARAM,
            "ty_gift_option": NULL_PARAM,
            "ty_amount_option": NULL_PARAM,
            "ty_from_amount": NULL_PARAM,
            "ty_to_amount": NULL_PARAM,
            "ty_alternate": NULL_PARAM,
            "ty_priority": NULL_PARAM,
        },
    )
    registry.register(
        "dp_savelink",
        {
            "link_id": NUMERIC,
            "donor_id": NUMERIC,
            "donor_id2": NUMERIC,
            "link_code": string(30),
            "user_id": user_id,
        },
    )

    # ==========================================================================
    # Multi-value fields and flags
    # ==========================================================================
    registry.register(
        "dp_savemultivalue_xml",
        {
            "matching_id": NUMERIC,
            "field_name": string(20),
            "code": string(30),
            "user_id": user_id,
        },
    )
    registry.register(
        "mergemultivalues",
        {
            "matchingid": NUMERIC,
            "fieldname": string(20),
            "valuestring": string(20),
            "debug": NUMERIC,
        },
    )
    registry.register(
        "dp_deletemultivalues_xml",
        {
            "matching_id": NUMERIC,
            "table_name": string(20),
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_saveflag_xml",
        {
            "donor_id": NUMERIC,
            "flag": string(30),
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_delflags_xml",
        {
            "donor_id": NUMERIC,
            "user_id": user_id,
        },
    )

    # ==========================================================================
    # Tributes
    # ==========================================================================
    registry.register(
        "dp_tribAnon_MyTribSummary",
        {
            "ShowAllRecords": NUMERIC,
            "userId": NULL_PARAM,
        },
    )
    registry.register(
        "dp_tribAnon_Search",
        {
            "Keywords": string(200),
            "IncludeInactive": NUMERIC,
        },
    )
    registry.register(
        "dp_tribAnon_Create",
        {
            "Name": string(200),
            "DPCodeID": NUMERIC,
            "ActiveFlg": BOOL,
            "UserCreateDt": DATE,
            "Recipients": string(),
        },
    )
    registry.register(
        "dp_tribAnon_AssocTribsToGift",
        {
            "Gift_ID": NUMERIC,
            "TributeID_List": string(),
        },
    )
    registry.register(
        "dp_tribAnon_SaveTribRecipient",
        {
            "DonorId": NUMERIC,
            "TributeID": NUMERIC,
            "GiftID": NUMERIC,
            "Level": LiteralParam("L"),
        },
    )
    registry.register(
        "dp_tribNotif_Save",
        {
            "Gift_ID": NUMERIC,
            "Donor_Id": NUMERIC,
            "glink": NUMERIC,
            "tlink": NUMERIC,
            "smount": MONEY,
            "total": MONEY,
            "bill": MONEY,
            "start_date": NULL_PARAM,
            "frequency": NULL_PARAM,
            "gift_type": LiteralParam("SN"),
            "record_type": LiteralParam("N"),
            "gl_code": string(),
            "solicit_code": string(),
            "sub_solicit_code": string(),
            "campaign": string(),
            "ty_letter_no": LiteralParam("NT"),
            "fmv": MONEY,
            "reference": string(),
            "gfname": NULL_PARAM,
            "glname": NULL_PARAM,
            "gift_narrative": string(4000),
            "membership_type": NULL_PARAM,
            "membership_level": NULL_PARAM,
            "membership_enr_date": NULL_PARAM,
            "membership_exp_date": NULL_PARAM,
            "address_id": NUMERIC,
            "user_id": user_id,
        },
    )
    registry.register(
        "dp_tribAnon_Update",
        {
            "TributeID": NUMERIC,
            "name": string(200),
            "dpcode_id": NUMERIC,
            "ActiveFlg": BOOL,
            "UserCreateDt": DATE,
            "recipients": ARRAY,
        },
    )

    # ==========================================================================
    # Payment methods
    # ==========================================================================
    registry.register(
        "dp_PaymentMethod_Insert",
        {
            "CustomerVaultID": string(55),
            "donor_id": NUMERIC,
            "IsDefault": BOOL,
            "AccountType": string(256),
            "dpPaymentMethodTypeID": string(20),
            "CardNumberLastFour": string(16),
            "CardExpirationDate": string(10),
            "BankAccountNumberLastFour": string(50),
            "NameOnAccount": string(256),
            "CreatedDate": DATE,
            "ModifiedDate": DATE,
            "import_id": NUMERIC,
            "created_by": string(20),
            "modified_by": string(20),
            "selected_currency": string(3),
        },
    )

    return registry
