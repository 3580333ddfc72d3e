from typing import Optional
from sqlalchemy import BigInteger, Column, DateTime, Index
from sqlmodel import SQLModel, Field
from datetime import datetime as dt, timezone

# Column widths, also enforced on submissions
MAX_LENGTHS = {
    "devicename": 100,
    "romtype": 50,
    "filename": 255,
    "id": 100,
    "url": 2048,
    "version": 50,
}

# Signed 64-bit column
MAX_BIGINT = 2 ** 63 - 1


class UpdateRecord(SQLModel, table=True):
    """Metadata of one downloadable update build"""
    __tablename__ = "update_records"
    __table_args__ = (
        Index("ix_update_records_devicename_romtype", "devicename", "romtype"),
    )

    # Surrogate key, `id` below is the build id and is not unique
    pk: Optional[int] = Field(default=None, primary_key=True)
    devicename: str = Field(max_length=MAX_LENGTHS["devicename"])  # e.g., "beryllium"
    romtype: str = Field(max_length=MAX_LENGTHS["romtype"])  # release channel, e.g., "weekly"
    datetime: int = Field(sa_column=Column(BigInteger, nullable=False))  # build time, unix seconds
    filename: str = Field(max_length=MAX_LENGTHS["filename"])
    id: str = Field(max_length=MAX_LENGTHS["id"])
    size: int = Field(sa_column=Column(BigInteger, nullable=False))  # bytes
    url: str = Field(max_length=MAX_LENGTHS["url"])
    version: str = Field(max_length=MAX_LENGTHS["version"])
    created_at: dt = Field(
        default_factory=lambda: dt.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
