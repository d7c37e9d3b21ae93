"""Lookup options — the validated, immutable configuration a client runs with."""

import dataclasses
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from address_lookup.lib.pca.base import ConfigurationError, PreferredLanguage, ResponseFormat, ResultFilter

if TYPE_CHECKING:
    from address_lookup.core.config import Settings

_COUNTRY_PATTERN = re.compile(r"[A-Za-z]{2}")


@dataclass(frozen=True)
class LookupOptions:
    """Options sent with, or shaping, every provider call.

    String values are coerced to their enums on construction. An
    unrecognized preferred language falls back to English; every other
    invalid value raises ``ConfigurationError``.
    """

    result_filter: ResultFilter = ResultFilter.EVERYTHING
    country: str = "GB"
    response_format: ResponseFormat = ResponseFormat.JSON
    preferred_language: PreferredLanguage = PreferredLanguage.ENGLISH
    use_https: bool = True

    def __post_init__(self) -> None:
        try:
            result_filter = ResultFilter(self.result_filter)
        except ValueError as e:
            msg = f"Result filter {self.result_filter!r} not supported. Allowed: {[f.value for f in ResultFilter]}"
            raise ConfigurationError(msg) from e

        try:
            response_format = ResponseFormat(self.response_format)
        except ValueError as e:
            allowed = [f.value for f in ResponseFormat]
            msg = f"Response format {self.response_format!r} not supported. Allowed: {allowed}"
            raise ConfigurationError(msg) from e

        if not isinstance(self.country, str) or not _COUNTRY_PATTERN.fullmatch(self.country):
            msg = f"Country must be a two-letter ISO code, got {self.country!r}"
            raise ConfigurationError(msg)

        if not isinstance(self.use_https, bool):
            msg = f"HTTPS flag must be a boolean, got {self.use_https!r}"
            raise ConfigurationError(msg)

        try:
            preferred_language = PreferredLanguage(self.preferred_language)
        except ValueError:
            preferred_language = PreferredLanguage.ENGLISH

        object.__setattr__(self, "result_filter", result_filter)
        object.__setattr__(self, "response_format", response_format)
        object.__setattr__(self, "country", self.country.upper())
        object.__setattr__(self, "preferred_language", preferred_language)

    def replace(self, **changes: Any) -> "LookupOptions":
        """Return a re-validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LookupOptions":
        """Build options from application settings.

        Raises:
            ConfigurationError: If any configured value is invalid.
        """
        return cls(
            result_filter=settings.pca_result_filter,  # type: ignore[arg-type]
            country=settings.pca_country,
            response_format=settings.pca_response_format,  # type: ignore[arg-type]
            preferred_language=settings.pca_preferred_language,  # type: ignore[arg-type]
            use_https=settings.pca_use_https,
        )
