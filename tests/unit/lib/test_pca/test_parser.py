"""Unit tests for the JSON and XML response parsers."""

import pytest

from address_lookup.lib.pca.base import ApiError, ConfigurationError, FormatError, ResponseFormat
from address_lookup.lib.pca.parser import JsonResponseParser, XmlResponseParser, get_response_parser
from tests.conftest import ERROR_ROW, FIND_ROWS, json_body

_XML_FIND = b"""<?xml version="1.0" encoding="utf-8"?>
<Table Columns="4" Rows="2">
  <Columns>
    <Column Name="Id"/>
    <Column Name="Text"/>
    <Column Name="Description"/>
    <Column Name="Next"/>
  </Columns>
  <Rows>
    <Row Id="GB|RM|A|1001" Text="Springfield, 1 High Street" Description="Anytown" Next="Retrieve"/>
    <Row Id="GB|RM|ENG|AB1-2CE" Text="Springfield, High Street" Next="Find" Extra="ignored"/>
  </Rows>
</Table>"""

_XML_ERROR = b"""<Table Columns="4" Rows="1">
  <Columns>
    <Column Name="Error"/>
    <Column Name="Description"/>
    <Column Name="Cause"/>
    <Column Name="Resolution"/>
  </Columns>
  <Rows>
    <Row Error="2" Description="Unknown key" Cause="The key was not found" Resolution="Check the key"/>
  </Rows>
</Table>"""


class TestJsonResponseParser:
    """Tests for JsonResponseParser."""

    def setup_method(self) -> None:
        self.parser = JsonResponseParser()

    def test_rows_keep_provider_field_names(self) -> None:
        """Rows come back in order with every provider field verbatim."""
        rows = self.parser.parse(json_body(FIND_ROWS))
        assert rows == FIND_ROWS
        assert [row["Next"] for row in rows] == ["Retrieve", "Find", "Retrieve"]

    def test_accepts_str_payload(self) -> None:
        """A str payload is decoded the same as bytes."""
        assert self.parser.parse('[{"Id": "1"}]') == [{"Id": "1"}]

    @pytest.mark.parametrize("payload", [b"", ""])
    def test_empty_payload_is_zero_rows(self, payload: bytes | str) -> None:
        """An empty payload yields no rows rather than an error."""
        assert self.parser.parse(payload) == []

    def test_empty_array(self) -> None:
        """An empty JSON array yields no rows."""
        assert self.parser.parse(b"[]") == []

    def test_error_row_raises_api_error(self) -> None:
        """An Error field on the first row raises ApiError with verbatim fields."""
        with pytest.raises(ApiError) as exc_info:
            self.parser.parse(json_body([ERROR_ROW]))

        err = exc_info.value
        assert err.code == "2"
        assert err.description == "Unknown key"
        assert err.cause == ERROR_ROW["Cause"]
        assert err.resolution == ERROR_ROW["Resolution"]
        assert str(err).startswith("Error 2 (Unknown key). ")
        assert str(err).endswith("Resolution: Please check that the key is correct")

    def test_malformed_json_raises_format_error(self) -> None:
        """Malformed JSON raises FormatError."""
        with pytest.raises(FormatError, match="Malformed JSON"):
            self.parser.parse(b"[{")

    def test_non_array_raises_format_error(self) -> None:
        """A top-level object is not a row list."""
        with pytest.raises(FormatError, match="JSON array"):
            self.parser.parse(b'{"Items": []}')

    def test_non_object_rows_raise_format_error(self) -> None:
        """Every row must be a JSON object."""
        with pytest.raises(FormatError, match="object"):
            self.parser.parse(b'["a", "b"]')

    def test_invalid_utf8_raises_format_error(self) -> None:
        """Undecodable bytes raise FormatError."""
        with pytest.raises(FormatError):
            self.parser.parse(b"[\x80]")


class TestXmlResponseParser:
    """Tests for XmlResponseParser."""

    def setup_method(self) -> None:
        self.parser = XmlResponseParser()

    def test_rows_keyed_by_declared_columns(self) -> None:
        """Each row maps every declared column name to its attribute value."""
        rows = self.parser.parse(_XML_FIND)
        assert rows == [
            {
                "Id": "GB|RM|A|1001",
                "Text": "Springfield, 1 High Street",
                "Description": "Anytown",
                "Next": "Retrieve",
            },
            {
                "Id": "GB|RM|ENG|AB1-2CE",
                "Text": "Springfield, High Street",
                "Description": "",
                "Next": "Find",
            },
        ]

    def test_key_order_follows_column_order(self) -> None:
        """Column order defines key iteration order."""
        rows = self.parser.parse(_XML_FIND)
        assert list(rows[0]) == ["Id", "Text", "Description", "Next"]

    def test_undeclared_attributes_are_dropped(self) -> None:
        """Only declared columns are read from a row."""
        rows = self.parser.parse(_XML_FIND)
        assert "Extra" not in rows[1]

    def test_error_column_raises_api_error(self) -> None:
        """A first column named Error raises ApiError from the row attributes."""
        with pytest.raises(ApiError) as exc_info:
            self.parser.parse(_XML_ERROR)

        assert exc_info.value.code == "2"
        assert exc_info.value.description == "Unknown key"
        assert exc_info.value.cause == "The key was not found"
        assert exc_info.value.resolution == "Check the key"

    def test_no_rows_section_is_zero_rows(self) -> None:
        """A table without a Rows section has no rows."""
        payload = b'<Table><Columns><Column Name="Id"/></Columns></Table>'
        assert self.parser.parse(payload) == []

    def test_empty_payload_is_zero_rows(self) -> None:
        """An empty payload yields no rows rather than an error."""
        assert self.parser.parse(b"") == []

    def test_malformed_xml_raises_format_error(self) -> None:
        """Malformed XML raises FormatError."""
        with pytest.raises(FormatError, match="Malformed XML"):
            self.parser.parse(b"<Table><Columns>")

    def test_missing_columns_raises_format_error(self) -> None:
        """A table without a Columns section is not a valid response."""
        with pytest.raises(FormatError, match="Columns"):
            self.parser.parse(b'<Table><Rows><Row Id="1"/></Rows></Table>')

    def test_json_payload_is_a_format_mismatch(self) -> None:
        """A JSON body parsed as XML raises FormatError."""
        with pytest.raises(FormatError):
            self.parser.parse(json_body(FIND_ROWS))


class TestGetResponseParser:
    """Tests for the parser factory."""

    def test_json(self) -> None:
        assert isinstance(get_response_parser(ResponseFormat.JSON), JsonResponseParser)

    def test_xml_by_string(self) -> None:
        assert isinstance(get_response_parser("xml"), XmlResponseParser)

    def test_unknown_format_raises_configuration_error(self) -> None:
        """An unsupported format is a configuration problem, not a payload one."""
        with pytest.raises(ConfigurationError, match="No response parser"):
            get_response_parser("csv")
