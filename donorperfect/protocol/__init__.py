# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: DonorPerfect wire protocol module.
# ============================================================================
"""DonorPerfect Protocol Module.

Pure encoding and decoding for the DonorPerfect XML API. Nothing in this
package performs I/O.

Components:
- coerce / ParameterRule: Value coercion per parameter kind
- ParameterEncoder: Builds ``@name=value,...`` parameter lists
- RequestBuilder: Builds query-string URLs within the length limit
- ResponseDecoder: Parses XML replies into DecodedResult variants
- ProcedureRegistry: Extensible stored procedure configuration
"""

from .coercion import LiteralParam, ParameterRule, ParamKind, coerce
from .exceptions import (
    DecodeError,
    DonorPerfectError,
    RemoteError,
    RequestTooLargeError,
    TransportError,
    ValidationError,
)
from .param_encoder import QUOTED_PARAMETERS, ParameterEncoder
from .procedure_registry import ProcedureConfig, ProcedureRegistry, create_default_registry
from .request_builder import (
    DEFAULT_BASE_URL,
    MAX_URL_LENGTH,
    ApiKeyAuth,
    Auth,
    EncodedRequest,
    RequestBuilder,
    UserPassAuth,
    normalize_sql_whitespace,
)
from .response_parser import ResponseDecoder
from .results import (
    DecodedRecord,
    DecodedResult,
    EmptyResult,
    RecordResult,
    RowsResult,
    ScalarResult,
    as_records,
)
from .schema import ColumnSchema, TableSchema, get_schema

__all__ = [
    "ApiKeyAuth",
    "Auth",
    "ColumnSchema",
    "DEFAULT_BASE_URL",
    "DecodeError",
    "DecodedRecord",
    "DecodedResult",
    "DonorPerfectError",
    "EmptyResult",
    "EncodedRequest",
    "LiteralParam",
    "MAX_URL_LENGTH",
    "ParamKind",
    "ParameterEncoder",
    "ParameterRule",
    "ProcedureConfig",
    "ProcedureRegistry",
    "QUOTED_PARAMETERS",
    "RecordResult",
    "RemoteError",
    "RequestBuilder",
    "RequestTooLargeError",
    "ResponseDecoder",
    "RowsResult",
    "ScalarResult",
    "TableSchema",
    "TransportError",
    "UserPassAuth",
    "ValidationError",
    "as_records",
    "coerce",
    "create_default_registry",
    "get_schema",
    "normalize_sql_whitespace",
]
