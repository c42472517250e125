"""
Environment-driven settings. A ``.env`` file in the working directory is
picked up through python-dotenv.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///contentmodel.db"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        return cls(
            database_url=os.environ.get("CONTENTMODEL_DATABASE_URL", DEFAULT_DATABASE_URL),
            echo_sql=os.environ.get("CONTENTMODEL_ECHO_SQL", "").lower() in _TRUE,
        )
