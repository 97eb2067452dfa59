"""Database models for the customer API"""

from customer_api.models.address import Address

from customer_api.models.customer import (
    Customer,
    GenericAttribute,
    CustomerAddressMapping,
    CUSTOMER_KEY_GROUP,
    FIRST_NAME_ATTRIBUTE,
    LAST_NAME_ATTRIBUTE,
    EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE,
)

from customer_api.models.store import (
    Store,
    StoreMapping,
    Language,
    Currency,
    LocaleStringResource,
)

from customer_api.models.newsletter import NewsLetterSubscription

__all__ = [
    "Address",
    "Customer",
    "GenericAttribute",
    "CustomerAddressMapping",
    "CUSTOMER_KEY_GROUP",
    "FIRST_NAME_ATTRIBUTE",
    "LAST_NAME_ATTRIBUTE",
    "EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE",
    "Store",
    "StoreMapping",
    "Language",
    "Currency",
    "LocaleStringResource",
    "NewsLetterSubscription",
]
