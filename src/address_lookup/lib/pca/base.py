"""Shared types and errors for the PCA Predict (Postcode Anywhere) client.

Defines the wire enums, the typed row shapes extracted from parsed
responses, the public candidate and address value objects, and the error
taxonomy raised by every lookup operation.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

COMPOSITE_ID_DELIMITER = ":"


class NextOperation(StrEnum):
    """Value of the ``Next`` column on a Find result row."""

    FIND = "Find"
    RETRIEVE = "Retrieve"


class ResultFilter(StrEnum):
    """Values accepted by the Find endpoint's ``SearchFor`` parameter."""

    EVERYTHING = "Everything"
    POSTAL_CODES = "PostalCodes"
    COMPANIES = "Companies"
    PLACES = "Places"


class ResponseFormat(StrEnum):
    """Payload format requested from the provider."""

    JSON = "json"
    XML = "xml"

    @property
    def wire_name(self) -> str:
        """Name used in the ``<format>.ws`` endpoint suffix."""
        # Attribute-per-column XML is served as "xmla"
        return "xmla" if self is ResponseFormat.XML else self.value


class PreferredLanguage(StrEnum):
    """Language versions of an address the provider can return."""

    ENGLISH = "English"
    WELSH = "Welsh"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class AddressLookupError(Exception):
    """Base class for every error raised by the lookup client."""


class ConfigurationError(AddressLookupError, ValueError):
    """Raised when an option (filter, format, country, https flag) is invalid."""


class TransportError(AddressLookupError):
    """Raised on a non-200 response or a network-level failure.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code, when a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiError(AddressLookupError):
    """Raised when the provider reports a business-level error in its payload.

    The fields are passed through verbatim for display and logging.

    Args:
        code: Provider error number.
        description: Short error description.
        cause: What caused the error.
        resolution: Suggested fix.
    """

    def __init__(self, code: str, description: str = "", cause: str = "", resolution: str = "") -> None:
        self.code = code
        self.description = description
        self.cause = cause
        self.resolution = resolution
        super().__init__(f"Error {code} ({description}). {cause}. Resolution: {resolution}")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ApiError":
        """Build an ApiError from a parsed error row."""
        return cls(
            code=_text(record.get("Error")),
            description=_text(record.get("Description")),
            cause=_text(record.get("Cause")),
            resolution=_text(record.get("Resolution")),
        )


class FormatError(AddressLookupError):
    """Raised when a payload cannot be parsed in the declared format."""


class EmptyResultError(AddressLookupError):
    """Raised when a Retrieve call finds no address for the given id."""


# ---------------------------------------------------------------------------
# Identifiers and rows
# ---------------------------------------------------------------------------


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _parse_next_operation(value: Any) -> NextOperation:
    try:
        return NextOperation(value)
    except ValueError as e:
        msg = f"Unrecognized next operation: {value!r}"
        raise FormatError(msg) from e


@dataclass(frozen=True)
class CompositeId:
    """A provider id paired with the operation it must be fed to next.

    Serialized on the wire as ``"<provider_id>:<next_operation>"``.
    """

    provider_id: str
    next_operation: NextOperation

    def __str__(self) -> str:
        return f"{self.provider_id}{COMPOSITE_ID_DELIMITER}{self.next_operation.value}"

    @classmethod
    def parse(cls, value: str) -> "CompositeId":
        """Split a serialized composite id on the first delimiter.

        Raises:
            FormatError: If the delimiter is missing or the operation is unknown.
        """
        provider_id, sep, operation = value.partition(COMPOSITE_ID_DELIMITER)
        if not sep:
            msg = f"Composite id {value!r} has no {COMPOSITE_ID_DELIMITER!r} delimiter"
            raise FormatError(msg)
        return cls(provider_id=provider_id, next_operation=_parse_next_operation(operation))


def provider_id_of(address_id: "CompositeId | str") -> str:
    """Return the provider id part of a composite id or its string form."""
    if isinstance(address_id, CompositeId):
        return address_id.provider_id
    return address_id.partition(COMPOSITE_ID_DELIMITER)[0]


@dataclass(frozen=True)
class SearchResultRow:
    """A typed Find result row."""

    id: str
    next_operation: NextOperation
    text: str = ""
    description: str | None = None

    @property
    def composite_id(self) -> CompositeId:
        return CompositeId(provider_id=self.id, next_operation=self.next_operation)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SearchResultRow":
        """Extract a Find row from a raw parsed record.

        Raises:
            FormatError: If ``Id`` or ``Next`` is missing, or ``Next`` is unknown.
        """
        for column in ("Id", "Next"):
            if record.get(column) in (None, ""):
                msg = f"Find result row is missing {column!r}"
                raise FormatError(msg)
        return cls(
            id=_text(record["Id"]),
            next_operation=_parse_next_operation(record["Next"]),
            text=_text(record.get("Text")),
            description=_optional_text(record.get("Description")),
        )


# Provider column name -> AddressRow attribute
_ADDRESS_COLUMNS: dict[str, str] = {
    "SubBuilding": "sub_building",
    "BuildingName": "building_name",
    "BuildingNumber": "building_number",
    "Street": "street",
    "SecondaryStreet": "secondary_street",
    "Line1": "line1",
    "Line2": "line2",
    "City": "city",
    "AdminAreaName": "admin_area_name",
    "Province": "province",
    "ProvinceName": "province_name",
    "PostalCode": "postal_code",
    "CountryIso2": "country_iso2",
    "Company": "company",
}


@dataclass(frozen=True)
class AddressRow:
    """A typed Retrieve result row. Every field is optional."""

    sub_building: str | None = None
    building_name: str | None = None
    building_number: str | None = None
    street: str | None = None
    secondary_street: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    admin_area_name: str | None = None
    province: str | None = None
    province_name: str | None = None
    postal_code: str | None = None
    country_iso2: str | None = None
    company: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AddressRow":
        """Extract the address columns from a raw parsed record."""
        return cls(**{attr: _optional_text(record.get(column)) for column, attr in _ADDRESS_COLUMNS.items()})


@dataclass(frozen=True)
class Candidate:
    """A Find result prepared for display to the caller."""

    id: CompositeId
    label: str
    description: str = ""

    @property
    def requires_find(self) -> bool:
        """Whether the candidate must be drilled into with another Find call."""
        return self.id.next_operation is NextOperation.FIND

    @property
    def place(self) -> str:
        """Description wrapped in parentheses, or an empty string."""
        return f"({self.description})" if self.description else ""

    def to_dict(self) -> dict[str, str]:
        return {"id": str(self.id), "label": self.label, "description": self.description, "place": self.place}


@dataclass(frozen=True)
class NormalizedAddress:
    """Country-agnostic structured address derived from a Retrieve row."""

    id: str
    premise: str = ""
    thoroughfare: str = ""
    locality: str = ""
    postal_code: str = ""
    administrative_area: str = ""
    organisation_name: str = ""
    sub_premise: str | None = None
    dependent_locality: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return addressfield-style keys, omitting unset optional fields."""
        data = {"id": self.id}
        if self.sub_premise is not None:
            data["sub_premise"] = self.sub_premise
        data["premise"] = self.premise
        data["thoroughfare"] = self.thoroughfare
        data["locality"] = self.locality
        if self.dependent_locality is not None:
            data["dependent_locality"] = self.dependent_locality
        data["postal_code"] = self.postal_code
        data["administrative_area"] = self.administrative_area
        data["organisation_name"] = self.organisation_name
        return data
