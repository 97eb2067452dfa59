from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from customer_api.models.base import Base, _resolve_sqlite_url, init_db


def _fresh_engine():
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def test_init_db_creates_missing_tables_once():
    engine = _fresh_engine()

    created = init_db(engine)

    assert set(created) == set(Base.metadata.tables)
    assert "generic_attributes" in inspect(engine).get_table_names()
    assert init_db(engine) == []
    engine.dispose()


def test_relative_sqlite_path_becomes_absolute():
    assert _resolve_sqlite_url("sqlite:///./data.db").startswith("sqlite:////")
    assert _resolve_sqlite_url("sqlite:////tmp/data.db") == "sqlite:////tmp/data.db"
    assert _resolve_sqlite_url("postgresql://u@h/db") == "postgresql://u@h/db"
