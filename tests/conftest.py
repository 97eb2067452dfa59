import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

# Keep test runs away from the local database and log directory
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="customer_api_logs_"))
os.environ.setdefault("CURRENT_STORE_ID", "0")

# Ensure project root is on sys.path to allow `import customer_api`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import customer_api.models  # noqa: F401  (registers tables)
from customer_api.models import (
    Address,
    Customer,
    CustomerAddressMapping,
    GenericAttribute,
    NewsLetterSubscription,
    Store,
    CUSTOMER_KEY_GROUP,
)
from customer_api.models.base import Base
from customer_api.services.customer_api_service import CustomerApiService
from customer_api.services.store_context import StoreContext
from customer_api.utils.cache import static_cache


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(autouse=True)
def clear_static_cache():
    static_cache.clear()
    yield
    static_cache.clear()


@pytest.fixture
def store(db):
    store = Store(id=1, name="Main store", url="http://testserver/", hosts="testserver", default_language_id=0)
    db.add(store)
    db.commit()
    return store


@pytest.fixture
def service(db, store):
    return CustomerApiService(db, StoreContext(db, store_id=store.id))


@pytest.fixture
def make_customer(db):
    """Insert a customer; attrs maps generic attribute key -> value."""
    counter = {"n": 0}

    def _make(attrs=None, **kwargs):
        counter["n"] += 1
        values = {
            "email": f"customer{counter['n']}@example.com",
            "username": f"customer{counter['n']}",
            "active": True,
            "deleted": False,
            "is_system_account": False,
            "registered_in_store_id": 1,
            "created_on_utc": datetime(2024, 1, counter["n"] % 28 + 1),
        }
        values.update(kwargs)
        customer = Customer(**values)
        db.add(customer)
        db.flush()
        for key, value in (attrs or {}).items():
            db.add(GenericAttribute(entity_id=customer.id, key_group=CUSTOMER_KEY_GROUP, key=key, value=value))
        db.commit()
        return customer

    return _make


@pytest.fixture
def add_address(db):
    def _add(customer, **kwargs):
        address = Address(first_name=customer.first_name, city="Springfield", **kwargs)
        db.add(address)
        db.flush()
        db.add(CustomerAddressMapping(customer_id=customer.id, address_id=address.id))
        db.commit()
        return address

    return _add


@pytest.fixture
def subscribe(db):
    def _subscribe(email, store_id=1, active=True):
        db.add(NewsLetterSubscription(email=email, store_id=store_id, active=active))
        db.commit()

    return _subscribe
