"""Shared test fixtures: a recording fake transport and sample provider payloads."""

import copy
import json

import pytest

from address_lookup.core.config import Settings


class FakeTransport:
    """Transport that returns canned responses and records requested URLs."""

    def __init__(self, *responses: tuple[int, bytes]) -> None:
        self._responses = list(responses)
        self.urls: list[str] = []
        self.timeouts: list[float] = []

    async def fetch(self, url: str, timeout: float) -> tuple[int, bytes]:
        self.urls.append(url)
        self.timeouts.append(timeout)
        return self._responses.pop(0)


def json_body(rows: list[dict]) -> bytes:
    """Encode rows the way the json.ws endpoints do."""
    return json.dumps(rows).encode()


FIND_ROWS = [
    {
        "Id": "GB|RM|A|1001",
        "Text": "Springfield, 1 High Street",
        "Highlight": "0-11",
        "Cursor": "0",
        "Description": "Anytown, AB1 2CD",
        "Next": "Retrieve",
    },
    {
        "Id": "GB|RM|ENG|AB1-2CE",
        "Text": "springfield, High Street",
        "Highlight": "0-11",
        "Cursor": "0",
        "Description": "Anytown - 12 Addresses",
        "Next": "Find",
    },
    {
        "Id": "GB|RM|A|1002",
        "Text": "Springfield Court",
        "Highlight": "0-11",
        "Cursor": "0",
        "Description": "",
        "Next": "Retrieve",
    },
]

RETRIEVE_ROW = {
    "Id": "GB|RM|A|1001",
    "DomesticId": "1001",
    "Language": "ENG",
    "Company": "Acme Widgets Ltd",
    "SubBuilding": "Flat 3",
    "BuildingNumber": "12",
    "BuildingName": "",
    "SecondaryStreet": "",
    "Street": "High Street",
    "Block": "",
    "Neighbourhood": "",
    "District": "",
    "City": "Anytown",
    "Line1": "Flat 3",
    "Line2": "12 High Street",
    "AdminAreaName": "Anyshire",
    "Province": "",
    "ProvinceName": "",
    "PostalCode": "AB1 2CD",
    "CountryName": "United Kingdom",
    "CountryIso2": "GB",
}

ERROR_ROW = {
    "Error": "2",
    "Description": "Unknown key",
    "Cause": "The key you are using to access the service was not found",
    "Resolution": "Please check that the key is correct",
}


@pytest.fixture
def find_rows() -> list[dict]:
    """Find endpoint rows: Retrieve, Find, Retrieve."""
    return copy.deepcopy(FIND_ROWS)


@pytest.fixture
def retrieve_row() -> dict:
    """A UK Retrieve endpoint row."""
    return copy.deepcopy(RETRIEVE_ROW)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        pca_api_key="AA11-BB22-CC33-DD44",
        pca_country="GB",
    )
