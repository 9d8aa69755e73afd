"""Address API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.domain import Address, Distance


class AddressPayload(BaseModel):
    """Request body for creating or replacing an address. Any ``id`` sent is ignored."""

    id: int | None = None
    street: str = Field(min_length=1)
    houseNumber: str = Field(min_length=1)
    postcode: str = Field(min_length=1)
    city: str = Field(min_length=1)
    country: str = Field(min_length=1)

    def to_domain(self, address_id: int = 0) -> Address:
        return Address(
            id=address_id,
            street=self.street,
            house_number=self.houseNumber,
            postcode=self.postcode,
            city=self.city,
            country=self.country,
        )


class AddressModel(BaseModel):
    id: int
    street: str
    houseNumber: str
    postcode: str
    city: str
    country: str

    @classmethod
    def from_domain(cls, address: Address) -> "AddressModel":
        return cls(
            id=address.id,
            street=address.street,
            houseNumber=address.house_number,
            postcode=address.postcode,
            city=address.city,
            country=address.country,
        )


class DistanceModel(BaseModel):
    address1: AddressModel
    address2: AddressModel
    distance: float = Field(ge=0.0, description="Great-circle distance in kilometres.")

    @classmethod
    def from_domain(cls, distance: Distance) -> "DistanceModel":
        return cls(
            address1=AddressModel.from_domain(distance.address1),
            address2=AddressModel.from_domain(distance.address2),
            distance=distance.distance,
        )
