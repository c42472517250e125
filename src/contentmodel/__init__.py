"""
Public surface for contentmodel.
Importing this module does **not** touch a database; call
`contentmodel.init_contentmodel(url)` (or build any other Store) during
application start-up and pass the store to your models.
"""

from .bootstrap import init_contentmodel
from .core.finders import FinderQuery, parse_finder
from .core.record import ContentModel
from .errors import ContentModelError, StoreNotConfiguredError, UnsupportedFinderError
from .events import on
from .persistence.base import QueryType, SortOrder, Store
from .persistence.memory import MemoryStore
from .persistence.store import SqlContentStore

__all__ = [
    "ContentModel",
    "ContentModelError",
    "FinderQuery",
    "MemoryStore",
    "QueryType",
    "SortOrder",
    "SqlContentStore",
    "Store",
    "StoreNotConfiguredError",
    "UnsupportedFinderError",
    "init_contentmodel",
    "on",
    "parse_finder",
]
