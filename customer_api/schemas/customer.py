"""
Customer DTOs returned by the REST API.

A CustomerDto is built fresh per request from exactly one customers row;
the derived fields (newsletter flag, cookie consent, addresses) are filled
in by the service layer afterwards.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from customer_api.schemas.address import AddressDto


class CustomerDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_guid: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    admin_comment: Optional[str] = None
    is_tax_exempt: bool = False
    active: bool = True
    deleted: bool = False
    is_system_account: bool = False
    system_name: Optional[str] = None
    last_ip_address: Optional[str] = None
    registered_in_store_id: int = 0
    language_id: int = 0
    currency_id: int = 0
    created_on_utc: Optional[datetime] = None
    last_login_date_utc: Optional[datetime] = None
    last_activity_date_utc: Optional[datetime] = None

    # Derived
    subscribed_to_newsletter: bool = False
    eu_cookie_law_accepted: Optional[bool] = None

    addresses: List[AddressDto] = Field(default_factory=list)
    billing_address: Optional[AddressDto] = None
    shipping_address: Optional[AddressDto] = None


class CustomersRootObject(BaseModel):
    customers: List[CustomerDto] = Field(default_factory=list)


class CustomersCountRootObject(BaseModel):
    count: int


class LanguageDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    language_culture: str
    unique_seo_code: Optional[str] = None
    published: bool = True
    display_order: int = 0


class CurrencyDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    currency_code: str
    rate: Optional[float] = None
    published: bool = True
    display_order: int = 0


class SetLanguageRequest(BaseModel):
    language_id: Optional[int] = None


class SetCurrencyRequest(BaseModel):
    currency_id: int
