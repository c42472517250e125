"""
Dict-backed store. Keeps records in insertion order, no persistence.
"""

from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from .base import QueryType, Record, SortOrder, matches, sort_records, split_type

logger = logging.getLogger(__name__)


class MemoryStore:
    """In-process implementation of the :class:`Store` contract."""

    def __init__(self) -> None:
        self._types: Dict[str, str] = {}
        self._data: Dict[str, Record] = {}

    def __len__(self) -> int:
        return len(self._data)

    def load(self, id: Union[str, int]) -> Optional[Record]:
        data = self._data.get(str(id))
        if data is None:
            logger.info("load: no record %s", id)
            return None
        return copy.deepcopy(data)

    def query(
        self,
        conditions: Mapping[str, Any],
        query_type: Union[QueryType, str] = QueryType.AND,
        sort_field: Optional[str] = None,
        sort_order: Union[SortOrder, str, None] = None,
    ) -> List[Record]:
        type_, rest = split_type(conditions)
        found = [
            copy.deepcopy(data)
            for uid, data in self._data.items()
            if (type_ is None or self._types[uid] == type_)
            and matches(data, rest, query_type)
        ]
        logger.debug("query %s %s -> %d rows", dict(conditions), query_type, len(found))
        return sort_records(found, sort_field, sort_order)

    def create(self, type: str, values: Mapping[str, Any]) -> Record:
        uid = str(uuid.uuid4())
        data = {**copy.deepcopy(dict(values)), "uuid": uid}
        self._types[uid] = type
        self._data[uid] = data
        logger.debug("created %s %s", type, uid)
        return copy.deepcopy(data)

    def update(self, id: Union[str, int], values: Mapping[str, Any]) -> Optional[Record]:
        data = self._data.get(str(id))
        if data is None:
            logger.info("update: no record %s", id)
            return None
        data.update(copy.deepcopy(dict(values)))
        data["uuid"] = str(id)
        return copy.deepcopy(data)

    def delete(self, id: Union[str, int]) -> bool:
        uid = str(id)
        if uid not in self._data:
            logger.warning("delete: no record %s", id)
            return False
        del self._data[uid]
        del self._types[uid]
        return True
