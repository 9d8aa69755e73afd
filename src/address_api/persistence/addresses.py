"""Database persistence for address records."""

from __future__ import annotations

import logging
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import SEARCH_FIELDS, Address, resolve_sort_key

logger = logging.getLogger(__name__)

_COLUMNS = ("street", "house_number", "postcode", "city", "country")


class AddressStoreError(RuntimeError):
    """Raised when the addresses table cannot be read or written."""


class AddressNotFoundError(AddressStoreError):
    """Raised when a write targets an address id that does not exist."""

    def __init__(self, address_id: int) -> None:
        self.address_id = address_id
        super().__init__(f"Address {address_id} not found")


def _table():
    supabase = get_supabase_client()
    if not supabase:
        raise AddressStoreError(
            "Supabase not configured. Set ADDR_SUPABASE_URL and ADDR_SUPABASE_KEY environment variables."
        )
    return supabase.table(settings.addresses_table)


def _row_to_address(row: dict[str, Any]) -> Address:
    return Address(
        id=int(row["id"]),
        street=row.get("street") or "",
        house_number=row.get("house_number") or "",
        postcode=row.get("postcode") or "",
        city=row.get("city") or "",
        country=row.get("country") or "",
    )


def _address_to_row(address: Address) -> dict[str, Any]:
    return {column: getattr(address, column) for column in _COLUMNS}


def list_addresses() -> list[Address]:
    """Return every stored address ordered by id."""
    response = _table().select("*").order("id").execute()
    return [_row_to_address(row) for row in response.data or []]


def get_address(address_id: int) -> Address | None:
    response = _table().select("*").eq("id", address_id).limit(1).execute()
    rows = response.data or []
    return _row_to_address(rows[0]) if rows else None


def search_addresses(search_value: str, sort_by: str, ascending: bool = True) -> list[Address]:
    """Filter addresses on any text field and optionally sort them by a named field.

    Args:
        search_value: Case-insensitive substring matched against every text field.
            An empty value disables filtering.
        sort_by: Field name (``Street``, ``houseNumber``, ``city``...). Names that
            match no field leave the store order untouched.
        ascending: When False the sorted sequence is reversed. Ignored when no
            sort applies.

    Returns:
        Matching addresses; an empty list when nothing matches.
    """
    addresses = list_addresses()

    if search_value:
        needle = search_value.lower()
        addresses = [
            address
            for address in addresses
            if any(needle in read(address).lower() for read in SEARCH_FIELDS.values())
        ]

    sort_key = resolve_sort_key(sort_by)
    if sort_key is None:
        return addresses

    # sorted() is stable, ties keep store order
    addresses = sorted(addresses, key=sort_key)
    if not ascending:
        addresses.reverse()
    return addresses


def create_address(address: Address) -> Address:
    """Insert an address and return it with the id assigned by the database."""
    response = _table().insert(_address_to_row(address)).execute()
    rows = response.data or []
    if not rows:
        raise AddressStoreError("Insert returned no row")
    created = _row_to_address(rows[0])
    logger.info(f"Created address {created.id}")
    return created


def update_address(address: Address, address_id: int) -> Address:
    """Overwrite every field of the address stored under ``address_id``.

    Raises:
        AddressNotFoundError: No row has ``address_id``.
    """
    # id stays pinned by the filter
    response = _table().update(_address_to_row(address)).eq("id", address_id).execute()
    if not response.data:
        raise AddressNotFoundError(address_id)
    logger.info(f"Updated address {address_id}")
    return _row_to_address(response.data[0])


def delete_address(address_id: int) -> Address | None:
    """Delete an address, returning the removed record or None if it did not exist."""
    response = _table().delete().eq("id", address_id).execute()
    rows = response.data or []
    if not rows:
        return None
    logger.info(f"Deleted address {address_id}")
    return _row_to_address(rows[0])


def check_connection() -> bool:
    """Return True when the addresses table answers a minimal query."""
    try:
        _table().select("id").limit(1).execute()
    except Exception as exc:
        logger.warning(f"Address table check failed: {exc}")
        return False
    return True
