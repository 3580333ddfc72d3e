# posp_updates/db/session.py
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine backing the record store"""
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        # Requests are served from the threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session gets an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def init_db(engine: Engine) -> None:
    """Create missing tables for all registered models"""
    # Registers the table on SQLModel.metadata
    from posp_updates.db.models import UpdateRecord  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ensured")
