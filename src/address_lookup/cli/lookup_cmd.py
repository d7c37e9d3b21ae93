"""Lookup CLI commands.

Results are printed as JSON on stdout. Lookup errors are printed on stderr
and exit with status 1.
"""

import asyncio
import json
from collections.abc import Coroutine
from typing import Any

import typer

from address_lookup.lib.pca import AddressLookupError, CompositeId
from address_lookup.services.lookup_service import LookupService


def _build_service(
    country: str | None = None,
    result_filter: str | None = None,
    response_format: str | None = None,
) -> LookupService:
    """Build a service from settings, applying any command-line overrides."""
    from address_lookup.core.config import get_settings

    service = LookupService.from_settings(get_settings())
    if result_filter is not None:
        service.set_filter(result_filter)
    if response_format is not None:
        service.set_format(response_format)
    if country is not None:
        service.set_country(country)
    return service


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    try:
        return asyncio.run(coro)
    except AddressLookupError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def find(
    term: str = typer.Argument(..., help="Free-text search term"),
    cursor: str | None = typer.Option(None, "--cursor", help="Id of a previous Find candidate to drill into"),
    country: str | None = typer.Option(None, "--country", help="ISO2 country code to search in"),
    result_filter: str | None = typer.Option(None, "--filter", help="Everything, PostalCodes, Companies or Places"),
    response_format: str | None = typer.Option(None, "--format", help="Response format: json or xml"),
) -> None:
    """Find candidate addresses matching TERM."""

    async def _find() -> None:
        service = _build_service(country, result_filter, response_format)
        candidates = await service.find(term, CompositeId.parse(cursor) if cursor else None)
        typer.echo(json.dumps([c.to_dict() for c in candidates], indent=2))

    _run(_find())


def retrieve(
    address_id: str = typer.Argument(..., help="Candidate id returned by find"),
    response_format: str | None = typer.Option(None, "--format", help="Response format: json or xml"),
) -> None:
    """Retrieve the normalized address for ADDRESS_ID."""

    async def _retrieve() -> None:
        service = _build_service(response_format=response_format)
        address = await service.retrieve(address_id)
        typer.echo(json.dumps(address.to_dict(), indent=2))

    _run(_retrieve())


def countries() -> None:
    """List the countries supported by the provider."""

    async def _countries() -> None:
        service = _build_service()
        rows = await service.get_country_data()
        typer.echo(json.dumps(rows, indent=2))

    _run(_countries())
