"""Administrative area tables — map subdivision names to their short codes.

The normalizer consults a table to turn a provider's province label
("Georgia", "Ontario") into the code an address form stores ("GA", "ON").
Tables are read-only; callers own their lifetime and any caching.
"""

from collections.abc import Mapping
from typing import Protocol

# Subdivision code -> name, per ISO2 country
US_STATES: dict[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "DC": "District of Columbia",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
    "PR": "Puerto Rico",
}

CA_PROVINCES: dict[str, str] = {
    "AB": "Alberta",
    "BC": "British Columbia",
    "MB": "Manitoba",
    "NB": "New Brunswick",
    "NL": "Newfoundland and Labrador",
    "NT": "Northwest Territories",
    "NS": "Nova Scotia",
    "NU": "Nunavut",
    "ON": "Ontario",
    "PE": "Prince Edward Island",
    "QC": "Quebec",
    "SK": "Saskatchewan",
    "YT": "Yukon Territory",
}

AU_STATES: dict[str, str] = {
    "ACT": "Australian Capital Territory",
    "NSW": "New South Wales",
    "NT": "Northern Territory",
    "QLD": "Queensland",
    "SA": "South Australia",
    "TAS": "Tasmania",
    "VIC": "Victoria",
    "WA": "Western Australia",
}

DEFAULT_ADMINISTRATIVE_AREAS: dict[str, dict[str, str]] = {
    "US": US_STATES,
    "CA": CA_PROVINCES,
    "AU": AU_STATES,
}


class AdministrativeAreaTable(Protocol):
    """Read-only lookup of area name -> area code for a country."""

    def lookup(self, country_iso2: str) -> Mapping[str, str] | None:
        """Return the name -> code mapping for a country, or None if unknown."""
        ...


class StaticAdministrativeAreaTable:
    """Administrative area table backed by in-memory code -> name mappings.

    Each country's mapping is flipped to name -> code once, at construction.

    Args:
        areas: ISO2 country code -> {area code: area name}. Defaults to
            ``DEFAULT_ADMINISTRATIVE_AREAS``.
    """

    def __init__(self, areas: Mapping[str, Mapping[str, str]] | None = None) -> None:
        source = DEFAULT_ADMINISTRATIVE_AREAS if areas is None else areas
        self._by_country: dict[str, dict[str, str]] = {
            country.upper(): {name: code for code, name in codes.items()} for country, codes in source.items()
        }

    def lookup(self, country_iso2: str) -> Mapping[str, str] | None:
        return self._by_country.get(country_iso2.upper())
