"""
Single entry-point that wires SQLAlchemy into contentmodel.
Call once at start-up and hand the returned store to your models.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .config import Settings
from .persistence.models import Base
from .persistence.store import SqlContentStore

logger = logging.getLogger(__name__)


def init_contentmodel(
    database_url: Optional[str] = None,
    *,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> SqlContentStore:
    """
    Build (or reuse) an engine, create the ``content`` table and return a
    :class:`SqlContentStore` bound to it.
    """
    if engine is None:
        settings = settings or Settings.from_env()
        url = database_url or settings.database_url
        engine = create_engine(url, echo=settings.echo_sql, pool_pre_ping=True, future=True)

    Base.metadata.create_all(engine)  # ← this line creates table
    logger.info("content store ready on %s", engine.url.render_as_string(hide_password=True))
    return SqlContentStore(engine)
