"""Address normalization — map a Retrieve row onto a structured address.

The provider populates different fields depending on the country searched
(some countries only return ``Line1``/``Line2``), so premise and
thoroughfare are derived with fallbacks rather than read directly.
"""

from typing import Literal

from address_lookup.lib.pca.areas import AdministrativeAreaTable
from address_lookup.lib.pca.base import AddressRow, NormalizedAddress

BuildingComponent = Literal["building_number", "building_name"]


def _join_present(values: list[str | None]) -> str:
    return " ".join(v for v in values if v)


def build_thoroughfare(row: AddressRow, building_component: BuildingComponent = "building_number") -> str:
    """Build the thoroughfare from street fields, falling back to the line fields.

    Args:
        row: Retrieve result row.
        building_component: Building field to prefix the street with.

    Returns:
        Space-joined non-empty values of the building component, street and
        secondary street, or of line1 and line2 when none of those are set.
    """
    thoroughfare = _join_present([getattr(row, building_component), row.street, row.secondary_street])
    if not thoroughfare:
        thoroughfare = _join_present([row.line1, row.line2])
    return thoroughfare


def resolve_administrative_area(row: AddressRow, areas: AdministrativeAreaTable | None = None) -> str:
    """Resolve the administrative area code, or the raw province label.

    Args:
        row: Retrieve result row.
        areas: Optional name -> code table, consulted by the row's country.

    Returns:
        The mapped area code, else the raw label, else an empty string.
    """
    label = row.province or row.province_name
    if not label:
        return ""
    if areas is not None and row.country_iso2:
        codes = areas.lookup(row.country_iso2)
        if codes and codes.get(label):
            return codes[label]
    return label


def normalize_address(
    row: AddressRow,
    *,
    address_id: str,
    areas: AdministrativeAreaTable | None = None,
    building_thoroughfare_component: BuildingComponent = "building_number",
) -> NormalizedAddress:
    """Normalize a Retrieve row into a NormalizedAddress.

    The building field consumed as the premise is never repeated in the
    thoroughfare: when the building number becomes the premise, the
    thoroughfare uses the building name instead.

    Args:
        row: Retrieve result row.
        address_id: Identifier to carry onto the normalized address.
        areas: Optional administrative area table.
        building_thoroughfare_component: Building field to use in the
            thoroughfare when the building name is the premise.

    Returns:
        The normalized address.
    """
    premise = ""
    if row.building_name:
        premise = row.building_name
    elif row.building_number:
        premise = row.building_number
        building_thoroughfare_component = "building_name"

    dependent_locality = None
    if row.admin_area_name and row.admin_area_name != row.city:
        dependent_locality = row.admin_area_name

    return NormalizedAddress(
        id=address_id,
        sub_premise=row.sub_building or None,
        premise=premise,
        thoroughfare=build_thoroughfare(row, building_thoroughfare_component),
        locality=row.city or "",
        dependent_locality=dependent_locality,
        postal_code=row.postal_code or "",
        administrative_area=resolve_administrative_area(row, areas),
        organisation_name=row.company or "",
    )
