# posp_updates/services/updates/update_store.py
import logging
from typing import List, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from posp_updates.db.models import UpdateRecord

logger = logging.getLogger(__name__)


class StoreUnavailableError(Exception):
    """The record store could not be read or written"""


class UpdateStore(Protocol):
    """Persistence interface the request handlers depend on"""

    def find(self, devicename: str, romtype: str) -> List[UpdateRecord]:
        ...

    def insert(self, record: UpdateRecord) -> UpdateRecord:
        ...

    def close(self) -> None:
        ...


class SqlUpdateStore:
    """Update records in a SQL database, one session per operation"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find(self, devicename: str, romtype: str) -> List[UpdateRecord]:
        """All records for the device and channel, oldest first"""
        try:
            with Session(self.engine) as session:
                statement = select(UpdateRecord).where(
                    UpdateRecord.devicename == devicename,
                    UpdateRecord.romtype == romtype
                ).order_by(UpdateRecord.pk)
                return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            logger.error(f"Error looking up updates for {devicename}/{romtype}: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e

    def insert(self, record: UpdateRecord) -> UpdateRecord:
        """Persist a new record"""
        with Session(self.engine, expire_on_commit=False) as session:
            try:
                session.add(record)
                session.commit()
                session.refresh(record)
            except SQLAlchemyError as e:
                logger.error(f"Error saving update {record.id}: {e}", exc_info=True)
                session.rollback()
                raise StoreUnavailableError(str(e)) from e

        logger.info(f"Update {record.id} saved for {record.devicename}/{record.romtype}")
        return record

    def close(self) -> None:
        self.engine.dispose()
