"""PCA Predict (Postcode Anywhere) client library.

Public API:
    - ResponseParser / JsonResponseParser / XmlResponseParser: payload decoding
    - get_response_parser: Parser factory keyed by response format
    - rank_results: Stable Find-before-Retrieve ordering
    - normalize_address / build_thoroughfare: Retrieve row -> structured address
    - AdministrativeAreaTable / StaticAdministrativeAreaTable: area name -> code
    - LookupOptions: Validated client configuration
    - build_api_url / HttpxTransport / Transport: HTTP plumbing
    - CompositeId, SearchResultRow, AddressRow, Candidate, NormalizedAddress: value types
    - AddressLookupError and subclasses: error taxonomy
"""

from address_lookup.lib.pca.areas import (
    DEFAULT_ADMINISTRATIVE_AREAS,
    AdministrativeAreaTable,
    StaticAdministrativeAreaTable,
)
from address_lookup.lib.pca.base import (
    AddressLookupError,
    AddressRow,
    ApiError,
    Candidate,
    CompositeId,
    ConfigurationError,
    EmptyResultError,
    FormatError,
    NextOperation,
    NormalizedAddress,
    PreferredLanguage,
    ResponseFormat,
    ResultFilter,
    SearchResultRow,
    TransportError,
    provider_id_of,
)
from address_lookup.lib.pca.normalizer import build_thoroughfare, normalize_address, resolve_administrative_area
from address_lookup.lib.pca.options import LookupOptions
from address_lookup.lib.pca.parser import (
    JsonResponseParser,
    ResponseParser,
    XmlResponseParser,
    get_response_parser,
)
from address_lookup.lib.pca.ranker import compare_next_operation, rank_results
from address_lookup.lib.pca.transport import HttpxTransport, Transport, build_api_url, redact_url

__all__ = [
    "DEFAULT_ADMINISTRATIVE_AREAS",
    "AddressLookupError",
    "AddressRow",
    "AdministrativeAreaTable",
    "ApiError",
    "Candidate",
    "CompositeId",
    "ConfigurationError",
    "EmptyResultError",
    "FormatError",
    "HttpxTransport",
    "JsonResponseParser",
    "LookupOptions",
    "NextOperation",
    "NormalizedAddress",
    "PreferredLanguage",
    "ResponseFormat",
    "ResponseParser",
    "ResultFilter",
    "SearchResultRow",
    "StaticAdministrativeAreaTable",
    "Transport",
    "TransportError",
    "XmlResponseParser",
    "build_api_url",
    "build_thoroughfare",
    "compare_next_operation",
    "get_response_parser",
    "normalize_address",
    "provider_id_of",
    "rank_results",
    "redact_url",
    "resolve_administrative_area",
]
