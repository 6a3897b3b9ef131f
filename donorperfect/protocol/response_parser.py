# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: XML response decoder for the DonorPerfect API.
# ============================================================================
"""Response Decoder.

Parses the pseudo-XML replies of the DonorPerfect endpoint.
Single responsibility: XML response parsing and shape dispatch.

Reply shapes:
    <result><error>...</error></result>                   -> RemoteError
    <result><field value="false" reason="..."/></result>  -> RemoteError
    <result/>                                             -> EmptyResult
    <result><record><field id="" value="42"/></record>    -> ScalarResult
    <result><record><field id="a" .../>...</record>       -> RecordResult
    <result><record>...</record><record>...</record>      -> RowsResult
"""

import logging
import re
from xml.etree import ElementTree

from .exceptions import DecodeError, RemoteError
from .results import (
    DecodedRecord,
    DecodedResult,
    EmptyResult,
    RecordResult,
    RowsResult,
    ScalarResult,
)

logger = logging.getLogger(__name__)

# The endpoint emits unescaped DATE: literals that may span several lines
DATE_LITERAL_PATTERN = re.compile(r"value='DATE:.*?'", re.DOTALL | re.IGNORECASE)


class ResponseDecoder:
    """Decodes DonorPerfect XML replies into DecodedResult variants."""

    def decode(self, xml_body: str) -> DecodedResult:
        """Decode a response body.

        Args:
            xml_body: Raw response text.

        Returns:
            EmptyResult, ScalarResult, RecordResult or RowsResult.

        Raises:
            RemoteError: If the endpoint reported an error.
            DecodeError: If the body is malformed or has inconsistent shapes.
        """
        repaired, count = DATE_LITERAL_PATTERN.subn("value=''", xml_body)
        if count:
            logger.warning(f"Repaired {count} malformed DATE literal(s) in DonorPerfect response")

        try:
            root = ElementTree.fromstring(repaired)
        except ElementTree.ParseError as e:
            logger.error(f"Error parsing DonorPerfect XML: {e}")
            raise DecodeError(f"malformed XML: {e}") from e

        self._check_errors(root)

        records = root.findall("record")
        if not records:
            logger.debug("DonorPerfect response has no records")
            return EmptyResult()

        if len(records) == 1:
            return self._decode_single(records[0])
        return self._decode_rows(records)

    def _check_errors(self, root: ElementTree.Element) -> None:
        """Raise RemoteError when the reply carries an error marker."""
        if root.tag == "error":
            raise RemoteError((root.text or "").strip())

        error = root.find("error")
        if error is not None:
            raise RemoteError((error.text or "").strip())

        status = root.find("field")
        if status is not None and status.get("value") == "false":
            raise RemoteError(status.get("reason") or "")

    def _decode_single(self, record: ElementTree.Element) -> DecodedResult:
        fields = record.findall("field")
        if not fields:
            return EmptyResult()

        values: dict[str, str] = {}
        for field in fields:
            field_id, value = self._read_field(field, 0)
            if not field_id:
                return self._scalar(value)
            values[field_id] = value

        logger.debug(f"Decoded single record with {len(values)} field(s)")
        return RecordResult(DecodedRecord(values))

    def _decode_rows(self, records: list[ElementTree.Element]) -> DecodedResult:
        is_row = len(records[0].findall("field")) > 0
        rows: list[DecodedRecord] = []

        for index, record in enumerate(records):
            fields = record.findall("field")
            if (len(fields) > 0) != is_row:
                raise DecodeError(f"shape mismatch at index {index}")
            if not is_row:
                continue

            values: dict[str, str] = {}
            for field in fields:
                field_id, value = self._read_field(field, index)
                if not field_id:
                    return self._scalar(value)
                values[field_id] = value
            rows.append(DecodedRecord(values))

        if not is_row:
            return EmptyResult()

        logger.debug(f"Decoded {len(rows)} row(s)")
        return RowsResult(tuple(rows))

    @staticmethod
    def _read_field(field: ElementTree.Element, index: int) -> tuple[str, str]:
        """Return the normalized (id, value) pair of a field element."""
        value = field.get("value")
        if value is None:
            raise DecodeError(f"field without value attribute at index {index}")
        field_id = (field.get("id") or "").strip().lower()
        return field_id, value.replace("`", "'")

    @staticmethod
    def _scalar(value: str) -> ScalarResult:
        try:
            return ScalarResult(int(value.strip()))
        except ValueError as e:
            raise DecodeError(f"scalar value is not an integer: {value!r}") from e
