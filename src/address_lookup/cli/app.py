"""Typer CLI root application."""

import typer

from address_lookup.core.config import get_settings
from address_lookup.core.logging import setup_logging

app = typer.Typer(name="address-lookup", help="PCA Predict address lookup CLI")


@app.callback()
def _main_callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log records on stderr"),  # noqa: FBT001
) -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=json_logs)


def _register_subcommands() -> None:
    """Register all CLI commands."""
    from address_lookup.cli.lookup_cmd import countries, find, retrieve

    app.command("find")(find)
    app.command("retrieve")(retrieve)
    app.command("countries")(countries)


_register_subcommands()
