"""
Engine, session factory and declarative base for the customer tables
"""
import os

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from customer_api.config import get_settings
from customer_api.utils.logger import log

settings = get_settings()


def _resolve_sqlite_url(url: str) -> str:
    """Make relative SQLite paths absolute so the working directory doesn't matter."""
    if url.startswith("sqlite:///") and not url.startswith("sqlite:////"):
        return "sqlite:///" + os.path.abspath(url[len("sqlite:///"):])
    return url


def build_engine(url: str) -> Engine:
    url = _resolve_sqlite_url(url)
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 60},
            poolclass=NullPool,
            pool_pre_ping=True,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=3,
        max_overflow=5,
        pool_recycle=300,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped session for FastAPI dependencies"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> list:
    """
    Create the customer tables that don't exist yet.

    Existing tables are left alone; column changes are shipped as alembic
    revisions (``alembic upgrade head``). Returns the names of the tables
    that were created.
    """
    # Importing the package registers every model on Base.metadata
    import customer_api.models  # noqa: F401

    bind = bind or engine
    existing = set(inspect(bind).get_table_names())
    Base.metadata.create_all(bind=bind)
    created = [name for name in Base.metadata.tables if name not in existing]
    if created:
        log.info(f"Created tables: {', '.join(sorted(created))}")
    return created
