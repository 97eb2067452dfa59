"""Address lookups for customer DTOs"""
from typing import List, Optional

from sqlalchemy.orm import Session

from customer_api.models import Address, CustomerAddressMapping
from customer_api.schemas import AddressDto


class AddressApiService:
    def __init__(self, db: Session):
        self.db = db

    def get_addresses_by_customer_id(self, customer_id: int) -> List[AddressDto]:
        """All addresses mapped to the customer, oldest first."""
        addresses = (
            self.db.query(Address)
            .join(CustomerAddressMapping, CustomerAddressMapping.address_id == Address.id)
            .filter(CustomerAddressMapping.customer_id == customer_id)
            .order_by(Address.id)
            .all()
        )
        return [AddressDto.model_validate(a) for a in addresses]

    def get_customer_address(self, customer_id: int, address_id: int) -> Optional[AddressDto]:
        """The address, only if it belongs to the customer."""
        address = (
            self.db.query(Address)
            .join(CustomerAddressMapping, CustomerAddressMapping.address_id == Address.id)
            .filter(
                CustomerAddressMapping.customer_id == customer_id,
                Address.id == address_id,
            )
            .first()
        )
        if address is None:
            return None
        return AddressDto.model_validate(address)
