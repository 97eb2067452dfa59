"""Address book entries"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from customer_api.models.base import Base


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    company = Column(String, nullable=True)

    # Location
    country = Column(String, nullable=True)
    state_province = Column(String, nullable=True)
    county = Column(String, nullable=True)
    city = Column(String, nullable=True)
    address1 = Column(String, nullable=True)
    address2 = Column(String, nullable=True)
    zip_postal_code = Column(String, nullable=True)

    phone_number = Column(String, nullable=True)
    fax_number = Column(String, nullable=True)
    created_on_utc = Column(DateTime, server_default=func.now())
