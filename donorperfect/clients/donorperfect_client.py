# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (DonorPerfect)
# Description: DonorPerfect XML API client.
# ============================================================================
"""
DonorPerfect API Client

Synchronous client for the DonorPerfect XML API.
Uses ProcedureRegistry for stored procedure configuration.

Components:
- ParameterEncoder: Builds procedure parameter lists
- RequestBuilder: Builds request URLs within the length limit
- ResponseDecoder: Parses XML replies
- Paginator: Window pagination for large SQL result sets

Example:
    with DonorPerfectClientFactory.from_settings() as client:
        result = client.dp_donorsearch({"last_name": "Smith"})
        for record in result.records():
            print(record["donor_id"])
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from donorperfect.config.settings import DEFAULT_APP_NAME, MAX_APP_NAME_LENGTH, Settings, get_settings
from donorperfect.protocol.coercion import ParameterRule, ParamKind, coerce
from donorperfect.protocol.exceptions import ValidationError
from donorperfect.protocol.param_encoder import ParameterEncoder
from donorperfect.protocol.procedure_registry import ProcedureRegistry, create_default_registry
from donorperfect.protocol.request_builder import DEFAULT_BASE_URL, Auth, EncodedRequest, RequestBuilder
from donorperfect.protocol.response_parser import ResponseDecoder
from donorperfect.protocol.results import DecodedRecord, DecodedResult

from .paginator import DEFAULT_PAGE_SIZE, Paginator
from .transport import DEFAULT_TIMEOUT, HttpxTransport, Transport

logger = logging.getLogger(__name__)

TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_DONOR_ID_RULE = ParameterRule(ParamKind.NUMERIC)
_FIELD_NAME_RULE = ParameterRule(ParamKind.STRING, 20)


class DonorPerfectClient:
    """
    Synchronous client for the DonorPerfect XML API.

    Every call is one GET request; nothing is retried or cached. Errors from
    any stage propagate as DonorPerfectError subclasses.
    """

    def __init__(
        self,
        auth: Auth,
        app_name: str = DEFAULT_APP_NAME,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
        registry: ProcedureRegistry | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Initialize DonorPerfect client.

        Args:
            auth: ApiKeyAuth or UserPassAuth credentials
            app_name: Name recorded as user_id on audited records (max 20 chars)
            base_url: Endpoint URL
            timeout: Request timeout in seconds (ignored with a custom transport)
            transport: Optional custom transport
            registry: Optional custom procedure registry
            page_size: Rows per page for paginated helpers

        Raises:
            ValueError: If app_name is too long or page_size is less than 1
        """
        if len(app_name) > MAX_APP_NAME_LENGTH:
            raise ValueError(f"The app name must be at most {MAX_APP_NAME_LENGTH} characters, got {app_name!r}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        self.auth = auth
        self.app_name = app_name
        self.base_url = base_url
        self.page_size = page_size

        self._transport = transport or HttpxTransport(timeout=timeout)
        self._registry = registry or create_default_registry(app_name)
        self._encoder = ParameterEncoder()
        self._builder = RequestBuilder(base_url)
        self._decoder = ResponseDecoder()
        self._paginator = Paginator(self.call_sql)

    def __enter__(self) -> DonorPerfectClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport."""
        self._transport.close()

    @property
    def registry(self) -> ProcedureRegistry:
        return self._registry

    # =========================================================================
    # Core calls
    # =========================================================================

    def call(self, action: str, params: Mapping[str, Any]) -> DecodedResult:
        """
        Call a procedure with already-coerced parameter values.

        Args:
            action: Remote procedure name
            params: Ordered parameter values (None is sent as NULL)

        Returns:
            Decoded response
        """
        request = self._builder.build(self.auth, action, self._encoder.serialize_params(params))
        logger.info(f"DonorPerfect call: action={action}, url_length={len(request.url)}")
        return self._execute(request)

    def call_procedure(self, name: str, data: Mapping[str, Any] | None = None) -> DecodedResult:
        """
        Call a registered procedure.

        Args:
            name: Registered procedure name
            data: Raw input values; omitted parameters are sent as NULL

        Returns:
            Decoded response

        Raises:
            KeyError: If the procedure is not registered
            ValidationError: If a value fails coercion
        """
        config = self._registry.get(name)
        prepared = config.prepare(data or {})
        params = self._encoder.encode(config.rules, prepared)
        request = self._builder.build(self.auth, config.action, params)
        logger.info(f"DonorPerfect call: action={config.action}, url_length={len(request.url)}")
        return self._execute(request)

    def call_sql(self, sql: str) -> DecodedResult:
        """
        Run a raw SQL action.

        User-provided values must already be escaped and inlined.
        """
        request = self._builder.build_sql(self.auth, sql)
        logger.info(f"DonorPerfect SQL call: url_length={len(request.url)}")
        return self._execute(request)

    def _execute(self, request: EncodedRequest) -> DecodedResult:
        body = self._transport.get(request.url)
        result = self._decoder.decode(body)
        logger.debug(f"DonorPerfect response decoded as {type(result).__name__}")
        return result

    # =========================================================================
    # SQL helpers
    # =========================================================================

    def get_tables(self) -> DecodedResult:
        """List user tables."""
        return self.call_sql("SELECT * FROM SYSOBJECTS WHERE xtype = 'U'")

    def get_columns(self, table: str) -> DecodedResult:
        """
        List the columns of a table.

        Raises:
            ValidationError: If the table name is not a plain identifier
        """
        if not TABLE_NAME_PATTERN.match(table):
            raise ValidationError("table", f"{table!r} is not a valid table name")
        return self.call_sql(f"EXEC sp_columns {table}")

    def get_tables_and_row_counts(self) -> DecodedResult:
        """List non-empty user tables with their row counts."""
        return self.call_sql(
            """
            SELECT
                t.NAME AS TableName,
                p.rows AS RowCounts
            FROM
                sys.tables t
            INNER JOIN
                sys.indexes i ON t.OBJECT_ID = i.object_id
            INNER JOIN
                sys.partitions p ON i.object_id = p.OBJECT_ID AND i.index_id = p.index_id
            WHERE
                t.is_ms_shipped = 0
                AND p.rows > 0
            GROUP BY
                t.Name, p.Rows
            ORDER BY
                t.Name
            """
        )

    def get_field_values(self, field_name: str) -> list[DecodedRecord]:
        """
        List every DPCODES entry of a field, paginated by code_id.

        Args:
            field_name: Code field name (e.g., GL_CODE)

        Returns:
            All code records ordered by code_id
        """
        name = coerce(_FIELD_NAME_RULE, field_name, "field_name").replace("'", "''")

        def query(start: int, end: int) -> str:
            return f"""
                SELECT * FROM (
                    SELECT
                        ROW_NUMBER() OVER(ORDER BY DPCODES.code_id ASC) AS row_number,
                        DPCODES.*
                    FROM DPCODES
                    WHERE DPCODES.field_name = '{name}'
                ) AS tmp
                WHERE tmp.row_number BETWEEN {start} AND {end}
            """

        return self._paginator.list_all(query, self.page_size)

    def get_donor(self, donor_id: Any) -> DecodedResult:
        """
        Get a single donor record.

        Returns:
            RecordResult, or EmptyResult when the donor does not exist

        Raises:
            ValidationError: If donor_id is empty or not numeric
        """
        number = coerce(_DONOR_ID_RULE, donor_id, "donor_id")
        if number is None:
            raise ValidationError("donor_id", "a donor id is required")
        return self.call_sql(f"SELECT TOP 1 * FROM DP WHERE donor_id = {number:f}")

    def list_donors(self) -> list[DecodedRecord]:
        """List donors, excluding inactive (IA) and deceased (DE) no-mail reasons."""

        def query(start: int, end: int) -> str:
            return f"""
                SELECT * FROM (
                    SELECT
                        ROW_NUMBER() OVER(ORDER BY dp.donor_id ASC) AS row_number,
                        dp.donor_id,
                        dp.first_name,
                        dp.middle_name,
                        dp.last_name,
                        dp.email,
                        dp.address,
                        dp.address2,
                        dp.city,
                        dp.state,
                        dp.zip,
                        dp.country,
                        dp.gift_total
                    FROM dp
                    LEFT JOIN dpudf ON dpudf.donor_id = dp.donor_id
                    WHERE
                        (dp.nomail_reason != 'IA'
                        AND dp.nomail_reason != 'DE')
                        OR dp.nomail_reason IS NULL
                ) AS tmp
                WHERE tmp.row_number BETWEEN {start} AND {end}
            """

        return self._paginator.list_all(query, self.page_size)

    # =========================================================================
    # Donors
    # =========================================================================

    def dp_donorsearch(self, data: Mapping[str, Any]) -> DecodedResult:
        """Search donors by id, name or address fields."""
        return self.call_procedure("dp_donorsearch", data)

    def dp_savedonor(self, data: Mapping[str, Any]) -> DecodedResult:
        """Create (donor_id=0) or update a donor. Returns the donor id as ScalarResult."""
        return self.call_procedure("dp_savedonor", data)

    # =========================================================================
    # Gifts and pledges
    # =========================================================================

    def dp_gifts(self, data: Mapping[str, Any]) -> DecodedResult:
        """List the gifts of a donor."""
        return self.call_procedure("dp_gifts", data)

    def dp_savegift(self, data: Mapping[str, Any]) -> DecodedResult:
        """Create (gift_id=0) or update a gift."""
        return self.call_procedure("dp_savegift", data)

    def dp_savepledge(self, data: Mapping[str, Any]) -> DecodedResult:
        """Create (gift_id=0) or update a pledge."""
        return self.call_procedure("dp_savepledge", data)

    # =========================================================================
    # Contacts, other info and addresses
    # =========================================================================

    def dp_savecontact(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_savecontact", data)

    def dp_saveotherinfo(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_saveotherinfo", data)

    def dp_saveaddress(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_saveaddress", data)

    # =========================================================================
    # User defined fields, codes and links
    # =========================================================================

    def dp_save_udf_xml(self, data: Mapping[str, Any]) -> DecodedResult:
        """Save a user defined field value (data_type C, D or N)."""
        return self.call_procedure("dp_save_udf_xml", data)

    def dp_savecode(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_savecode", data)

    def dp_savelink(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_savelink", data)

    # =========================================================================
    # Multi-value fields and flags
    # =========================================================================

    def dp_savemultivalue_xml(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_savemultivalue_xml", data)

    def mergemultivalues(self, data: Mapping[str, Any]) -> DecodedResult:
        """Replace all values of a multi-value field with a comma separated list."""
        return self.call_procedure("mergemultivalues", data)

    def dp_deletemultivalues_xml(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_deletemultivalues_xml", data)

    def dp_saveflag_xml(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_saveflag_xml", data)

    def dp_delflags_xml(self, data: Mapping[str, Any]) -> DecodedResult:
        """Delete all flags of a donor."""
        return self.call_procedure("dp_delflags_xml", data)

    # =========================================================================
    # Tributes
    # =========================================================================

    def dp_tribAnon_MyTribSummary(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_tribAnon_MyTribSummary", data)

    def dp_tribAnon_Search(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_tribAnon_Search", data)

    def dp_tribAnon_Create(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_tribAnon_Create", data)

    def dp_tribAnon_AssocTribsToGift(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_tribAnon_AssocTribsToGift", data)

    def dp_tribAnon_SaveTribRecipient(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_tribAnon_SaveTribRecipient", data)

    def dp_tribNotif_Save(self, data: Mapping[str, Any]) -> DecodedResult:
        """Create a tribute gift notification record."""
        return self.call_procedure("dp_tribNotif_Save", data)

    def dp_tribAnon_Update(self, data: Mapping[str, Any]) -> DecodedResult:
        """Update a tribute. recipients must list every existing and new recipient."""
        return self.call_procedure("dp_tribAnon_Update", data)

    # =========================================================================
    # Payment methods
    # =========================================================================

    def dp_PaymentMethod_Insert(self, data: Mapping[str, Any]) -> DecodedResult:
        return self.call_procedure("dp_PaymentMethod_Insert", data)


class DonorPerfectClientFactory:
    """Factory for DonorPerfect client instances."""

    @staticmethod
    def from_settings(settings: Settings | None = None, transport: Transport | None = None) -> DonorPerfectClient:
        """
        Create a client from environment settings.

        Args:
            settings: Settings instance (defaults to get_settings())
            transport: Optional custom transport

        Returns:
            DonorPerfectClient: Configured client

        Raises:
            ValueError: If credentials are not configured
        """
        settings = settings or get_settings()
        return DonorPerfectClient(
            auth=settings.auth,
            app_name=settings.DONORPERFECT_APP_NAME,
            base_url=settings.DONORPERFECT_BASE_URL,
            timeout=settings.DONORPERFECT_TIMEOUT,
            transport=transport,
            page_size=settings.DONORPERFECT_PAGE_SIZE,
        )
