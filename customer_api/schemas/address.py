from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AddressDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    country: Optional[str] = None
    state_province: Optional[str] = None
    county: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    zip_postal_code: Optional[str] = None
    phone_number: Optional[str] = None
    fax_number: Optional[str] = None
    created_on_utc: Optional[datetime] = None
