"""
Customer data models

Customer accounts plus the generic key/value attribute rows and address
mappings attached to them.
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.sql import func

from customer_api.models.base import Base

# key_group value for attribute rows owned by a customer
CUSTOMER_KEY_GROUP = "Customer"

# Generic attribute keys folded into the customer DTO
FIRST_NAME_ATTRIBUTE = "FirstName"
LAST_NAME_ATTRIBUTE = "LastName"
EU_COOKIE_LAW_ACCEPTED_ATTRIBUTE = "EuCookieLawAccepted"


class Customer(Base):
    """Registered customer account"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    customer_guid = Column(String(36), nullable=True)
    username = Column(String, index=True, nullable=True)
    email = Column(String, index=True, nullable=True)

    # Profile
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    company = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    admin_comment = Column(Text, nullable=True)
    is_tax_exempt = Column(Boolean, default=False, nullable=False)

    # Account state
    active = Column(Boolean, default=True, nullable=False)
    deleted = Column(Boolean, default=False, nullable=False, index=True)
    is_system_account = Column(Boolean, default=False, nullable=False)
    system_name = Column(String, nullable=True)  # search_engine, background_task, ...
    last_ip_address = Column(String, nullable=True)

    # Scoping and preferences (0 = not set)
    registered_in_store_id = Column(Integer, default=0, nullable=False, index=True)
    language_id = Column(Integer, default=0, nullable=False)
    currency_id = Column(Integer, default=0, nullable=False)

    # Default addresses
    billing_address_id = Column(Integer, ForeignKey("addresses.id"), nullable=True)
    shipping_address_id = Column(Integer, ForeignKey("addresses.id"), nullable=True)

    # Timestamps
    created_on_utc = Column(DateTime, server_default=func.now(), index=True)
    last_login_date_utc = Column(DateTime, nullable=True)
    last_activity_date_utc = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Customer {self.id} {self.email}>"


class GenericAttribute(Base):
    """Key/value fact attached to any entity, scoped by key_group"""
    __tablename__ = "generic_attributes"

    id = Column(Integer, primary_key=True, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    key_group = Column(String(400), nullable=False, index=True)  # entity kind, e.g. "Customer"
    key = Column(String(400), nullable=False)
    value = Column(Text, nullable=True)
    store_id = Column(Integer, default=0, nullable=False)
    created_or_updated_date_utc = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<GenericAttribute {self.key_group}:{self.entity_id} {self.key}={self.value!r}>"


class CustomerAddressMapping(Base):
    """Links a customer to one of its addresses"""
    __tablename__ = "customer_address_mappings"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False, index=True)
