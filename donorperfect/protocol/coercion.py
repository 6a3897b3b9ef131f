# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Value coercion for procedure parameters.
# ============================================================================
"""Value Coercion.

Converts loosely-typed input values into the literal forms accepted by the
DonorPerfect stored procedures. Single responsibility: validation and
normalization of one value at a time. Escaping is left to ParameterEncoder.

Usage:
    rule = ParameterRule(ParamKind.STRING, max_length=75)
    value = coerce(rule, "  O'Brien ")  # "O'Brien"
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from .exceptions import ValidationError

NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

_CENTS = Decimal("0.01")


class ParamKind(Enum):
    """Semantic type of a procedure parameter."""

    STRING = "string"
    NUMERIC = "numeric"
    MONEY = "money"
    DATE = "date"
    DATETIME = "datetime"
    BOOL = "bool"
    ARRAY = "array"


@dataclass(frozen=True)
class ParameterRule:
    """Coercion rule attached to a parameter name.

    Attributes:
        kind: Semantic type used to pick the coercion function.
        max_length: Maximum trimmed length (STRING only).
    """

    kind: ParamKind
    max_length: int | None = None


@dataclass(frozen=True)
class LiteralParam:
    """Fixed parameter value that bypasses coercion (e.g. gift_type='SN').

    A value of None always serializes as NULL.
    """

    value: Any = None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        # str() would switch to exponent notation for small values
        return f"{value:f}"
    return str(value).strip()


def coerce_string(value: Any, max_length: int | None = None, field: str = "value") -> str:
    """Trim a value and enforce an optional maximum length.

    Raises:
        ValidationError: If the trimmed value is longer than max_length.
    """
    text = _as_text(value)
    if max_length is not None and len(text) > max_length:
        raise ValidationError(field, f"{text!r} is longer than the max allowed length of {max_length}")
    return text


def coerce_numeric(value: Any, field: str = "value") -> Decimal | None:
    """Validate a decimal numeral.

    Exponent notation is rejected because the remote numeric parser does not
    accept it.

    Returns:
        The number as Decimal, or None when the trimmed value is empty.

    Raises:
        ValidationError: If the value is not a plain decimal numeral.
    """
    if isinstance(value, bool):
        raise ValidationError(field, f"{value!r} is not numeric")
    text = _as_text(value)
    if not text:
        return None
    if "e" in text.lower() or not NUMERIC_PATTERN.match(text):
        raise ValidationError(field, f"{text!r} is not numeric")
    return Decimal(text)


def coerce_money(value: Any, field: str = "value") -> str:
    """Format a numeral with exactly two fractional digits.

    Empty input is formatted as zero ("0.00").

    Raises:
        ValidationError: On the same inputs coerce_numeric rejects.
    """
    number = coerce_numeric(value, field)
    if number is None:
        number = Decimal(0)
    return f"{number.quantize(_CENTS, rounding=ROUND_HALF_UP):f}"


def coerce_date(value: Any, field: str = "value") -> Any:
    """Pass-through: callers supply MM/DD/YYYY text.

    Extension point for date objects; no parsing is done yet.
    """
    return value


def coerce_datetime(value: Any, field: str = "value") -> Any:
    """Pass-through: callers supply datetime text the remote accepts.

    Extension point for datetime objects; no parsing is done yet.
    """
    return value


def coerce_bool(value: Any, field: str = "value") -> bool:
    return bool(value)


def coerce_array(value: Any, field: str = "value") -> list[Any] | tuple[Any, ...]:
    """Require a list or tuple of items for pipe-joining downstream.

    Raises:
        ValidationError: If the value is not a list or tuple.
    """
    if not isinstance(value, (list, tuple)):
        raise ValidationError(field, "The provided value is not a valid array")
    return value


_COERCERS: dict[ParamKind, Callable[..., Any]] = {
    ParamKind.NUMERIC: coerce_numeric,
    ParamKind.MONEY: coerce_money,
    ParamKind.DATE: coerce_date,
    ParamKind.DATETIME: coerce_datetime,
    ParamKind.BOOL: coerce_bool,
    ParamKind.ARRAY: coerce_array,
}


def coerce(rule: ParameterRule, value: Any, field: str = "value") -> Any:
    """Coerce a value according to its rule.

    Args:
        rule: Parameter rule selecting the coercion function.
        value: Raw input value.
        field: Parameter name, used in validation messages.

    Returns:
        The serialization-ready value.
    """
    if rule.kind is ParamKind.STRING:
        return coerce_string(value, rule.max_length, field)
    return _COERCERS[rule.kind](value, field)
