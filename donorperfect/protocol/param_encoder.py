# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Parameter list encoder for DonorPerfect procedure calls.
# ============================================================================
"""Parameter Encoder.

Builds the ``params`` value of a procedure call: ``@name=value,@name=value``.
Single responsibility: coercion dispatch and per-value quoting/escaping.

The remote endpoint feeds this string into a SQL-like parser. Parameter order
and the escaping rules below must match what its procedures expect.
"""

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from .coercion import LiteralParam, ParameterRule, coerce

NULL = "NULL"

# Numerals emitted bare; '+' signs and exponents stay quoted
BARE_NUMERIC_PATTERN = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)$")

# Parameters whose numeric-looking values must stay quoted ('0810' expiry dates)
QUOTED_PARAMETERS = frozenset({"CardExpirationDate"})

Rule = ParameterRule | LiteralParam


class ParameterEncoder:
    """Serializes procedure parameters.

    Iteration order is always the ruleset's declared order, so a given
    ruleset and data mapping produce byte-identical output.
    """

    def encode(self, ruleset: Mapping[str, Rule], data: Mapping[str, Any]) -> str:
        """Coerce and serialize data according to a ruleset.

        Args:
            ruleset: Ordered mapping of parameter name to rule or literal.
            data: Raw input values keyed by parameter name.

        Returns:
            The encoded parameter list.

        Raises:
            ValidationError: If a value fails coercion.
        """
        return self.serialize_params(self.prepare(ruleset, data))

    def prepare(self, ruleset: Mapping[str, Rule], data: Mapping[str, Any]) -> dict[str, Any]:
        """Coerce data into serialization-ready values, in ruleset order."""
        values: dict[str, Any] = {}
        for name, rule in ruleset.items():
            if isinstance(rule, LiteralParam):
                values[name] = rule.value
            elif data.get(name) is None:
                # Omitted parameters are sent as NULL
                values[name] = None
            else:
                values[name] = coerce(rule, data[name], name)
        return values

    def serialize_params(self, values: Mapping[str, Any]) -> str:
        """Serialize already-coerced values as ``@name=value`` pairs."""
        return ",".join(f"@{name}={self.serialize_value(name, value)}" for name, value in values.items())

    def serialize_value(self, name: str, value: Any) -> str:
        """Serialize a single value by its shape.

        Args:
            name: Parameter name (some names force quoting).
            value: Coerced value.

        Returns:
            SQL-like literal for the value.
        """
        if value is None:
            return NULL
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (list, tuple)):
            return "N'" + "|".join(self._escape(item) for item in value) + "'"

        text = f"{value:f}" if isinstance(value, Decimal) else str(value).strip()
        if not text:
            return NULL
        if BARE_NUMERIC_PATTERN.match(text) and name not in QUOTED_PARAMETERS:
            return text
        return f"'{self._escape(text)}'"

    @staticmethod
    def _escape(value: Any) -> str:
        """Double single quotes, strip double quotes and encode percent signs."""
        s = "" if value is None else str(value)
        return s.replace("'", "''").replace('"', "").replace("%", "%25")
