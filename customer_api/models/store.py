"""
Store, localization and directory models

Stores scope customers and newsletter subscriptions; languages and
currencies are the customer's display preferences.
"""
from sqlalchemy import Column, Integer, String, Boolean, Numeric, Text

from customer_api.models.base import Base


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    url = Column(String, nullable=True)  # e.g. https://shop.example.com/
    hosts = Column(String, nullable=True)  # comma-separated host names
    default_language_id = Column(Integer, default=0, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)

    def host_list(self) -> list[str]:
        if not self.hosts:
            return []
        return [h.strip().lower() for h in self.hosts.split(",") if h.strip()]


class StoreMapping(Base):
    """Restricts an entity (language, ...) to the stores it is mapped to"""
    __tablename__ = "store_mappings"

    id = Column(Integer, primary_key=True, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    entity_name = Column(String(400), nullable=False)  # "Language", ...
    store_id = Column(Integer, nullable=False, index=True)


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    language_culture = Column(String(20), nullable=False)  # en-US
    unique_seo_code = Column(String(2), nullable=True)
    published = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    limited_to_stores = Column(Boolean, default=False, nullable=False)


class Currency(Base):
    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    currency_code = Column(String(5), nullable=False)
    rate = Column(Numeric(18, 4), default=1)
    published = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)


class LocaleStringResource(Base):
    """Localized UI string (menu titles, messages)"""
    __tablename__ = "locale_string_resources"

    id = Column(Integer, primary_key=True, index=True)
    language_id = Column(Integer, nullable=False, index=True)
    resource_name = Column(String(200), nullable=False, index=True)
    resource_value = Column(Text, nullable=False)
