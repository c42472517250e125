"""
The store contract every ContentModel talks to, plus the condition matching
shared by the bundled stores.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from pydantic_core import to_json

Record = Dict[str, Any]


class QueryType(str, enum.Enum):
    AND = "AND"
    OR = "OR"


class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


class Store(Protocol):
    """Anything that can load, query, create, update and delete typed records."""

    def load(self, id: Union[str, int]) -> Optional[Record]: ...

    def query(
        self,
        conditions: Mapping[str, Any],
        query_type: Union[QueryType, str] = QueryType.AND,
        sort_field: Optional[str] = None,
        sort_order: Union[SortOrder, str, None] = None,
    ) -> List[Record]: ...

    def create(self, type: str, values: Mapping[str, Any]) -> Optional[Record]: ...

    def update(
        self, id: Union[str, int], values: Mapping[str, Any]
    ) -> Optional[Record]: ...

    def delete(self, id: Union[str, int]) -> bool: ...


# helpers
def matches(
    data: Mapping[str, Any],
    conditions: Mapping[str, Any],
    query_type: Union[QueryType, str] = QueryType.AND,
) -> bool:
    """True if ``data`` satisfies ``conditions`` joined by ``query_type``."""
    if not conditions:
        return True
    hits = (k in data and data[k] == v for k, v in conditions.items())
    if QueryType(query_type) is QueryType.OR:
        return any(hits)
    return all(hits)


def _sort_key(value: Any) -> tuple:
    # numbers, then strings, then anything else by its JSON text
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, to_json(value).decode())


def sort_records(
    records: Iterable[Record],
    sort_field: Optional[str],
    sort_order: Union[SortOrder, str, None] = None,
) -> List[Record]:
    """
    Stable sort on one document field. Records lacking the field, or holding
    ``None`` in it, come first in either direction.
    """
    records = list(records)
    if not sort_field:
        return records
    reverse = sort_order is not None and SortOrder(sort_order) is SortOrder.DESC
    blank = [r for r in records if r.get(sort_field) is None]
    present = [r for r in records if r.get(sort_field) is not None]
    present.sort(key=lambda r: _sort_key(r[sort_field]), reverse=reverse)
    return blank + present


def split_type(conditions: Mapping[str, Any]) -> tuple[Optional[str], Dict[str, Any]]:
    """Pull the ``type`` tag out of a condition mapping."""
    rest = dict(conditions)
    return rest.pop("type", None), rest
