"""Address CRUD, search and distance endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, Response, status

from ...persistence import addresses as address_store
from ...schemas.addresses import AddressModel, AddressPayload, DistanceModel
from ...services.distance import calculate_distance
from ...services.geocoding import NoGeocodingResultError

ADDRESS_NOT_FOUND = "Address not found"
ADDRESSES_NOT_FOUND = "One or both addresses not found in DB"

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/addresses", tags=["addresses"])


def _internal_error(action: str, exc: Exception) -> HTTPException:
    logger.exception(f"Error {action}: {exc}")
    # No exception detail leaves the service
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _address_list(addresses) -> List[AddressModel] | Response:
    if not addresses:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [AddressModel.from_domain(address) for address in addresses]


@router.get("", response_model=List[AddressModel], status_code=status.HTTP_200_OK)
def list_addresses():
    try:
        addresses = address_store.list_addresses()
    except Exception as exc:
        raise _internal_error("listing addresses", exc) from exc
    return _address_list(addresses)


@router.get(
    "/calculateDistance/{address_id1}/{address_id2}",
    response_model=DistanceModel,
    status_code=status.HTTP_200_OK,
)
def get_distance(address_id1: int, address_id2: int):
    """Geocode two stored addresses and return the distance between them in km."""
    try:
        address1 = address_store.get_address(address_id1)
        address2 = address_store.get_address(address_id2)
        if address1 is None or address2 is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ADDRESSES_NOT_FOUND)
        return DistanceModel.from_domain(calculate_distance(address1, address2))
    except HTTPException:
        raise
    except NoGeocodingResultError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error(f"calculating distance between {address_id1} and {address_id2}", exc) from exc


@router.get("/{address_id}", response_model=AddressModel, status_code=status.HTTP_200_OK)
def get_address_by_id(address_id: int):
    # A missing address answers 204, unlike PUT/DELETE which answer 404.
    try:
        address = address_store.get_address(address_id)
    except Exception as exc:
        raise _internal_error(f"retrieving address {address_id}", exc) from exc
    if address is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return AddressModel.from_domain(address)


@router.get(
    "/{search_value}/{sort_by}/{ascending}",
    response_model=List[AddressModel],
    status_code=status.HTTP_200_OK,
)
def search_addresses(search_value: str, sort_by: str, ascending: bool):
    """Filter addresses on any text field and sort them by the named field."""
    try:
        addresses = address_store.search_addresses(search_value, sort_by, ascending)
    except Exception as exc:
        raise _internal_error("searching addresses", exc) from exc
    return _address_list(addresses)


@router.post("", response_model=AddressModel, status_code=status.HTTP_201_CREATED)
def create_address(payload: AddressPayload, request: Request, response: Response) -> AddressModel:
    try:
        created = address_store.create_address(payload.to_domain())
    except Exception as exc:
        raise _internal_error("creating address", exc) from exc
    response.headers["Location"] = str(request.url_for("get_address_by_id", address_id=created.id))
    return AddressModel.from_domain(created)


@router.put("/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_address(address_id: int, payload: AddressPayload) -> Response:
    try:
        if address_store.get_address(address_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ADDRESS_NOT_FOUND)
        address_store.update_address(payload.to_domain(address_id), address_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error(f"updating address {address_id}", exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_address(address_id: int) -> Response:
    try:
        if address_store.get_address(address_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ADDRESS_NOT_FOUND)
        address_store.delete_address(address_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error(f"deleting address {address_id}", exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
