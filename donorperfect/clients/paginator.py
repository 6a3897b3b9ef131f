# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (DonorPerfect)
# Description: Row-number window pagination over raw SQL actions.
# ============================================================================
"""
DonorPerfect Paginator

Repeatedly issues a windowed SQL query until a short page signals the end.
There is no total-count query: a full page always means "maybe more", so
an exact multiple of the page size costs one extra empty round trip.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from donorperfect.protocol.exceptions import DecodeError
from donorperfect.protocol.results import (
    DecodedRecord,
    DecodedResult,
    EmptyResult,
    RecordResult,
    RowsResult,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500

QueryTemplate = Callable[[int, int], str]
SqlExecutor = Callable[[str], DecodedResult]


@dataclass
class _PageCursor:
    window_start: int
    window_size: int

    @property
    def window_end(self) -> int:
        return self.window_start + self.window_size - 1

    def advance(self) -> None:
        self.window_start += self.window_size


class Paginator:
    """
    Sequential window paginator.

    Example:
        paginator = Paginator(client.call_sql)
        records = paginator.list_all(
            lambda start, end: f"SELECT ... WHERE tmp.row_number BETWEEN {start} AND {end}",
            page_size=500,
        )
    """

    def __init__(self, execute_sql: SqlExecutor):
        """
        Initialize paginator.

        Args:
            execute_sql: Callable running one SQL action and decoding the reply
        """
        self._execute_sql = execute_sql

    def list_all(self, query_template: QueryTemplate, page_size: int = DEFAULT_PAGE_SIZE) -> list[DecodedRecord]:
        """
        Fetch every page and concatenate the records in fetch order.

        Args:
            query_template: Builds the SQL for a 1-based inclusive row window
            page_size: Rows per window (>= 1)

        Returns:
            All records, in order

        Raises:
            ValueError: If page_size is less than 1
            DecodeError: If a page decodes to a scalar
        """
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        cursor = _PageCursor(window_start=1, window_size=page_size)
        records: list[DecodedRecord] = []

        while True:
            result = self._execute_sql(query_template(cursor.window_start, cursor.window_end))
            page = self._page_records(result)
            records.extend(page)

            logger.debug(
                f"Fetched page rows {cursor.window_start}-{cursor.window_end}: "
                f"{len(page)} record(s), {len(records)} total"
            )

            if len(page) < page_size:
                return records
            cursor.advance()

    @staticmethod
    def _page_records(result: DecodedResult) -> list[DecodedRecord]:
        if isinstance(result, (EmptyResult, RecordResult, RowsResult)):
            return result.records()
        raise DecodeError(f"expected rows from paginated query, got {type(result).__name__}")
