"""API response/request schemas"""

from customer_api.schemas.address import AddressDto
from customer_api.schemas.customer import (
    CustomerDto,
    CustomersRootObject,
    CustomersCountRootObject,
    LanguageDto,
    CurrencyDto,
    SetLanguageRequest,
    SetCurrencyRequest,
)

__all__ = [
    "AddressDto",
    "CustomerDto",
    "CustomersRootObject",
    "CustomersCountRootObject",
    "LanguageDto",
    "CurrencyDto",
    "SetLanguageRequest",
    "SetCurrencyRequest",
]
