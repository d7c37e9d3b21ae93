"""Lookup service — the Find → Retrieve workflow against the PCA Predict API.

``find`` returns ranked candidates for a search term; candidates whose id
ends in ``:Find`` must be fed back into ``find`` as the cursor, the rest can
be passed to ``retrieve`` to get a normalized address.
"""

import re
from typing import TYPE_CHECKING, Any

from loguru import logger

from address_lookup.lib.pca import (
    AddressRow,
    AdministrativeAreaTable,
    ApiError,
    Candidate,
    CompositeId,
    EmptyResultError,
    LookupOptions,
    NextOperation,
    NormalizedAddress,
    SearchResultRow,
    StaticAdministrativeAreaTable,
    Transport,
    TransportError,
    build_api_url,
    get_response_parser,
    normalize_address,
    provider_id_of,
    rank_results,
    redact_url,
)
from address_lookup.lib.pca.transport import DEFAULT_HOST, DEFAULT_TIMEOUT, HttpxTransport

if TYPE_CHECKING:
    from address_lookup.core.config import Settings

# Endpoint paths keyed by operation name
ENDPOINTS: dict[str, str] = {
    NextOperation.FIND: "CapturePlus/Interactive/Find/v2.10",
    NextOperation.RETRIEVE: "CapturePlus/Interactive/Retrieve/v2.10",
    "CountryData": "Extras/Lists/CountryData/v3.00",
}


def strip_search_term(text: str, term: str) -> str:
    """Remove the search term the provider echoes at the start of a result.

    Args:
        text: Result display text, e.g. ``"Springfield, Anytown"``.
        term: The search term, e.g. ``"Springfield"``.

    Returns:
        The text without a leading ``"<term>,"`` (case-insensitive), trimmed.
    """
    if term:
        text = re.sub(rf"^\s*{re.escape(term)},", "", text, count=1, flags=re.IGNORECASE)
    return text.strip()


class LookupService:
    """Address lookup client for the PCA Predict CapturePlus API.

    Args:
        api_key: Provider account key.
        options: Validated lookup options.
        user_name: Royal Mail licence username (not needed for click licences).
        transport: HTTP transport; defaults to ``HttpxTransport``.
        areas: Administrative area table used to map province names to codes.
        timeout: Per-request timeout in seconds.
        host: API host name.
    """

    def __init__(
        self,
        api_key: str,
        options: LookupOptions | None = None,
        *,
        user_name: str = "",
        transport: Transport | None = None,
        areas: AdministrativeAreaTable | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        host: str = DEFAULT_HOST,
    ) -> None:
        self._api_key = api_key
        self._user_name = user_name
        self._options = options or LookupOptions()
        self._transport = transport or HttpxTransport()
        self._areas = areas
        self._timeout = timeout
        self._host = host
        self.last_cursor: CompositeId | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        *,
        transport: Transport | None = None,
        areas: AdministrativeAreaTable | None = None,
    ) -> "LookupService":
        """Build a service from application settings.

        Uses the bundled administrative area table unless one is given.

        Raises:
            ConfigurationError: If any configured option is invalid.
        """
        return cls(
            api_key=settings.pca_api_key,
            options=LookupOptions.from_settings(settings),
            user_name=settings.pca_user_name,
            transport=transport,
            areas=areas if areas is not None else StaticAdministrativeAreaTable(),
            timeout=settings.pca_timeout,
            host=settings.pca_host,
        )

    @property
    def options(self) -> LookupOptions:
        return self._options

    def set_filter(self, result_filter: str) -> "LookupService":
        self._options = self._options.replace(result_filter=result_filter)
        return self

    def set_format(self, response_format: str) -> "LookupService":
        self._options = self._options.replace(response_format=response_format)
        return self

    def set_https(self, use_https: bool) -> "LookupService":
        self._options = self._options.replace(use_https=use_https)
        return self

    def set_country(self, country: str) -> "LookupService":
        self._options = self._options.replace(country=country)
        return self

    async def find(self, term: str, cursor: CompositeId | None = None) -> list[Candidate]:
        """Find candidate addresses matching a search term.

        Args:
            term: Free-text search term.
            cursor: A previous Find candidate's id to drill into. Defaults to
                ``last_cursor``.

        Returns:
            Candidates, Find drill-downs first. Empty when nothing matched.

        Raises:
            TransportError: On a non-200 response or network failure.
            ApiError: If the provider reports an error.
            FormatError: If the payload cannot be parsed.
        """
        options = self._options
        cursor = cursor if cursor is not None else self.last_cursor
        params = {
            "SearchTerm": term,
            "SearchFor": options.result_filter.value,
            "Country": options.country,
        }
        if cursor is not None:
            params["LastId"] = cursor.provider_id

        records = await self._call(options, ENDPOINTS[NextOperation.FIND], params)
        rows = rank_results(SearchResultRow.from_record(record) for record in records)

        return [
            Candidate(
                id=row.composite_id,
                label=strip_search_term(row.text, term),
                description=row.description or "",
            )
            for row in rows
        ]

    async def retrieve(self, address_id: CompositeId | str) -> NormalizedAddress:
        """Retrieve and normalize the full address for a candidate id.

        Args:
            address_id: Candidate id, as a ``CompositeId`` or its string form.
                Only the provider id part is sent.

        Returns:
            The normalized address, carrying ``address_id`` as its id.

        Raises:
            EmptyResultError: If the provider returns no rows for the id.
            TransportError: On a non-200 response or network failure.
            ApiError: If the provider reports an error.
            FormatError: If the payload cannot be parsed.
        """
        params = {"Id": provider_id_of(address_id)}
        records = await self._call(self._options, ENDPOINTS[NextOperation.RETRIEVE], params)
        if not records:
            msg = f"No address found for id {address_id}"
            raise EmptyResultError(msg)

        return normalize_address(AddressRow.from_record(records[0]), address_id=str(address_id), areas=self._areas)

    async def get_country_data(self) -> list[dict[str, Any]]:
        """Return the provider's list of supported countries, as raw rows."""
        return await self._call(self._options, ENDPOINTS["CountryData"])

    async def _call(
        self,
        options: LookupOptions,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Call an endpoint and parse its payload into rows.

        The same options build the URL and pick the parser, so a
        reconfiguration while the request is in flight does not affect it.
        """
        url = build_api_url(
            endpoint,
            params,
            options=options,
            api_key=self._api_key,
            user_name=self._user_name,
            host=self._host,
        )
        logger.debug(f"PCA Predict GET {redact_url(url)}")

        status_code, body = await self._transport.fetch(url, self._timeout)
        if status_code != 200:
            logger.warning(f"PCA Predict returned HTTP {status_code} for {endpoint}")
            raise TransportError(f"Provider returned HTTP {status_code}", status_code=status_code)

        try:
            records = get_response_parser(options.response_format).parse(body)
        except ApiError as e:
            logger.warning(f"PCA Predict API error {e.code} ({e.description}) for {endpoint}")
            raise

        logger.debug(f"PCA Predict {endpoint} returned {len(records)} row(s)")
        return records
