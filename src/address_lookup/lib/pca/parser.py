"""Response parsers — decode JSON or XML payloads into uniform row records.

Both variants produce the same representation (a list of dicts keyed by the
provider's column names) and share the same error semantics: an empty
payload is zero rows, an error row becomes ``ApiError``, and anything that
cannot be decoded in the declared format becomes ``FormatError``.
"""

import json
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from address_lookup.lib.pca.base import ApiError, ConfigurationError, FormatError, ResponseFormat

Row = dict[str, Any]

_ERROR_COLUMN = "Error"


class ResponseParser(ABC):
    """Abstract payload parser. One implementation per response format."""

    @property
    @abstractmethod
    def response_format(self) -> ResponseFormat:
        """Format this parser decodes."""

    def parse(self, payload: bytes | str) -> list[Row]:
        """Parse a raw payload into an ordered list of row records.

        Args:
            payload: Raw response body.

        Returns:
            List of rows with provider field names verbatim. Empty when the
            payload is empty.

        Raises:
            ApiError: If the payload carries a provider error row.
            FormatError: If the payload cannot be decoded.
        """
        if not payload:
            logger.debug(f"Empty {self.response_format} payload, no rows")
            return []
        return self._parse(payload)

    @abstractmethod
    def _parse(self, payload: bytes | str) -> list[Row]:
        """Decode a non-empty payload."""


class JsonResponseParser(ResponseParser):
    """Parser for the ``json.ws`` endpoints: a top-level array of objects."""

    @property
    def response_format(self) -> ResponseFormat:
        return ResponseFormat.JSON

    def _parse(self, payload: bytes | str) -> list[Row]:
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            msg = f"Malformed JSON payload: {e}"
            raise FormatError(msg) from e

        if not isinstance(data, list):
            msg = f"Expected a JSON array of rows, got {type(data).__name__}"
            raise FormatError(msg)
        if not all(isinstance(item, dict) for item in data):
            msg = "Expected every JSON row to be an object"
            raise FormatError(msg)

        if data and _ERROR_COLUMN in data[0]:
            raise ApiError.from_record(data[0])

        return [dict(item) for item in data]


class XmlResponseParser(ResponseParser):
    """Parser for the ``xmla.ws`` endpoints.

    The payload declares its columns once and carries one attribute per
    column on every row::

        <Table Columns="2" Rows="1">
          <Columns><Column Name="Id"/><Column Name="Text"/></Columns>
          <Rows><Row Id="GB|RM|A|1" Text="1 High St"/></Rows>
        </Table>
    """

    @property
    def response_format(self) -> ResponseFormat:
        return ResponseFormat.XML

    def _parse(self, payload: bytes | str) -> list[Row]:
        try:
            root = ET.fromstring(payload)
        except ET.ParseError as e:
            msg = f"Malformed XML payload: {e}"
            raise FormatError(msg) from e

        columns_node = root.find("Columns")
        if columns_node is None:
            msg = "XML payload has no Columns section"
            raise FormatError(msg)
        columns = [column.attrib.get("Name", "") for column in columns_node.findall("Column")]

        rows_node = root.find("Rows")
        rows = rows_node.findall("Row") if rows_node is not None else []

        if columns and columns[0] == _ERROR_COLUMN:
            error_row = rows[0].attrib if rows else {}
            raise ApiError.from_record(error_row)

        # Identity is by column name; column order only fixes key order
        return [{name: row.attrib.get(name, "") for name in columns} for row in rows]


_PARSERS: dict[ResponseFormat, type[ResponseParser]] = {
    ResponseFormat.JSON: JsonResponseParser,
    ResponseFormat.XML: XmlResponseParser,
}


def get_response_parser(response_format: ResponseFormat | str) -> ResponseParser:
    """Get the parser for a response format.

    Args:
        response_format: ``json`` or ``xml``.

    Returns:
        A parser instance for that format.

    Raises:
        ConfigurationError: If no parser is registered for the format.
    """
    cls = _PARSERS.get(response_format)  # type: ignore[call-overload]
    if cls is None:
        msg = f"No response parser for format {response_format!r}. Available: {[f.value for f in _PARSERS]}"
        raise ConfigurationError(msg)
    return cls()
