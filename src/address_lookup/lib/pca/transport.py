"""URL building and the HTTP transport for the PCA Predict API."""

from collections.abc import Mapping
from typing import Protocol

import httpx
from loguru import logger

from address_lookup.lib.pca.base import TransportError
from address_lookup.lib.pca.options import LookupOptions

DEFAULT_HOST = "services.postcodeanywhere.co.uk"
DEFAULT_TIMEOUT = 10.0


def build_api_url(
    endpoint: str,
    params: Mapping[str, str] | None = None,
    *,
    options: LookupOptions,
    api_key: str,
    user_name: str = "",
    host: str = DEFAULT_HOST,
) -> str:
    """Build the request URL for an API endpoint.

    The key, preferred language and user name are sent on every request;
    call-specific params take precedence over them.

    Args:
        endpoint: Endpoint path, e.g. ``CapturePlus/Interactive/Find/v2.10``.
        params: Call-specific query parameters.
        options: Lookup options (scheme, format, language).
        api_key: Provider account key.
        user_name: Username tied to a Royal Mail licence; empty for click licences.
        host: API host name.

    Returns:
        ``{scheme}://{host}/{endpoint}/{format}.ws?{query}``.
    """
    query: dict[str, str] = dict(params or {})
    query.setdefault("Key", api_key)
    query.setdefault("PreferredLanguage", options.preferred_language.value)
    query.setdefault("UserName", user_name)

    scheme = "https" if options.use_https else "http"
    base = f"{scheme}://{host}/{endpoint.strip('/')}/{options.response_format.wire_name}.ws"
    return str(httpx.URL(base, params=query))


def redact_url(url: str) -> str:
    """Drop the query string (which carries the API key) for logging."""
    return url.split("?", 1)[0]


class Transport(Protocol):
    """Performs one HTTP GET and returns the raw response."""

    async def fetch(self, url: str, timeout: float) -> tuple[int, bytes]:
        """Fetch a URL.

        Returns:
            ``(status_code, body)``.

        Raises:
            TransportError: On timeout or network failure.
        """
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``; one client per request."""

    async def fetch(self, url: str, timeout: float) -> tuple[int, bytes]:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"PCA Predict request timed out: {redact_url(url)}")
            raise TransportError("Request to the PCA Predict API timed out") from e
        except httpx.ConnectError as e:
            logger.warning(f"PCA Predict connection error: {redact_url(url)}")
            raise TransportError("Could not reach the PCA Predict API") from e
        except httpx.HTTPError as e:
            logger.warning(f"PCA Predict transport error: {type(e).__name__}")
            raise TransportError(f"PCA Predict transport error: {e}") from e

        return response.status_code, response.content
