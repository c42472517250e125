"""
Single-table schema: every content record of every type lives here.
"""

import datetime as dt

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def now_utc() -> dt.datetime:  # compact timezone‑aware timestamp
    return dt.datetime.now(tz=dt.timezone.utc)


class ContentRow(Base):
    """One row per record; fields live in the ``data`` document."""

    __tablename__ = "content"

    uuid = Column(String(36), primary_key=True)
    content_type = Column(String, nullable=False, index=True)
    created_ts = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_ts = Column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False
    )
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
