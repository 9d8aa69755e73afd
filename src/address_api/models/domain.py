"""Domain models for address records and derived distances."""

from dataclasses import dataclass, fields
from operator import attrgetter
from typing import Any, Callable, Optional, get_type_hints


@dataclass(slots=True)
class Address:
    """A postal address as stored in the addresses table."""

    id: int
    street: str
    house_number: str
    postcode: str
    city: str
    country: str


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Distance:
    """Great-circle distance in kilometres between two addresses."""

    address1: Address
    address2: Address
    distance: float


def public_name(attribute: str) -> str:
    """Map a dataclass attribute to its public field name (``house_number`` -> ``HouseNumber``)."""
    return "".join(part.capitalize() for part in attribute.split("_"))


def _normalise(name: str) -> str:
    return name.replace("_", "").lower()


def _string_accessor(attribute: str) -> Callable[[Address], str]:
    getter = attrgetter(attribute)

    def read(address: Address) -> str:
        value = getter(address)
        return "" if value is None else str(value)

    return read


def _sort_accessor(attribute: str, field_type: Any) -> Callable[[Address], Any]:
    if field_type is str:
        read = _string_accessor(attribute)
        return lambda address: read(address).casefold()
    return attrgetter(attribute)


def _build_field_tables() -> tuple[
    tuple[str, ...],
    dict[str, Callable[[Address], str]],
    dict[str, Callable[[Address], Any]],
]:
    hints = get_type_hints(Address)
    names: list[str] = []
    search: dict[str, Callable[[Address], str]] = {}
    sort: dict[str, Callable[[Address], Any]] = {}
    for field in fields(Address):
        name = public_name(field.name)
        field_type = hints[field.name]
        names.append(name)
        if field_type is str:
            search[name] = _string_accessor(field.name)
        sort[name] = _sort_accessor(field.name, field_type)
    return tuple(names), search, sort


# Generated from the Address definition so new fields join search and sort automatically.
ADDRESS_FIELDS, SEARCH_FIELDS, SORT_FIELDS = _build_field_tables()

_SORT_LOOKUP = {_normalise(name): accessor for name, accessor in SORT_FIELDS.items()}


def resolve_sort_key(name: Optional[str]) -> Optional[Callable[[Address], Any]]:
    """Return the sort key accessor for ``name`` (case-insensitive), or None if it names no field."""
    if not name:
        return None
    return _SORT_LOOKUP.get(_normalise(name))
