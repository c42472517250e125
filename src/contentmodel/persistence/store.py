"""
Thin data-access layer around the `content` table.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy import and_, func, or_, select, text, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from .base import QueryType, Record, SortOrder, matches, split_type
from .models import ContentRow

logger = logging.getLogger(__name__)


class SqlContentStore:
    """SQLAlchemy implementation of the :class:`Store` contract."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _new_session(self) -> Session:
        return Session(bind=self.engine, future=True)

    # ---- reads ---------------------------------------------------------
    def load(self, id: Union[str, int]) -> Optional[Record]:
        """Return the ``data`` document for ``id`` or ``None``."""
        with self._new_session() as s:
            row = s.get(ContentRow, str(id))
            if row is None:
                logger.info("load: no record %s", id)
                return None
            return dict(row.data)

    # ---- SQL building ---------------------------------------------------
    @property
    def _jsonb(self) -> bool:
        return self.engine.dialect.name == "postgresql"

    @staticmethod
    def _extract(key: str) -> ColumnElement:
        """JSON1 ``json_extract``: native SQL value, JSON null and missing ➜ NULL."""
        path = '$."' + key.replace('"', '\\"') + '"'
        return func.json_extract(ContentRow.data, path)

    def _field_clause(self, key: str, value: Any) -> Optional[ColumnElement]:
        """``data[key] == value`` in SQL, or ``None`` if only Python can tell."""
        if self._jsonb:
            return type_coerce(ContentRow.data, JSONB).contains({key: value})
        if isinstance(value, (bool, int, float, str)):
            return self._extract(key) == value
        return None

    def _sort_expr(self, key: str) -> ColumnElement:
        if self._jsonb:
            field = type_coerce(ContentRow.data, JSONB)[key]
            return func.nullif(field, text("'null'::jsonb"))
        return self._extract(key)

    def _where(
        self, conditions: Mapping[str, Any], query_type: Union[QueryType, str]
    ) -> tuple[Optional[ColumnElement], bool]:
        """
        WHERE clause for the field conditions plus a flag telling whether the
        rows still have to go through :func:`matches`.
        """
        if not conditions:
            return None, False
        if self._jsonb and QueryType(query_type) is QueryType.AND:
            return type_coerce(ContentRow.data, JSONB).contains(dict(conditions)), False

        clauses = [self._field_clause(k, v) for k, v in conditions.items()]
        sql = [c for c in clauses if c is not None]
        residual = len(sql) < len(clauses)
        if QueryType(query_type) is QueryType.OR:
            # one condition SQL can't express makes the whole OR unusable
            return (None if residual else or_(*sql)), residual
        return (and_(*sql) if sql else None), residual

    # ---- reads ---------------------------------------------------------
    def query(
        self,
        conditions: Mapping[str, Any],
        query_type: Union[QueryType, str] = QueryType.AND,
        sort_field: Optional[str] = None,
        sort_order: Union[SortOrder, str, None] = None,
    ) -> List[Record]:
        """
        ``type`` narrows by column, field conditions run against the JSON
        document in SQL (JSONB containment on Postgres, ``json_extract``
        elsewhere). Records lacking ``sort_field`` sort first.
        """
        type_, rest = split_type(conditions)
        q = select(ContentRow)
        if type_ is not None:
            q = q.where(ContentRow.content_type == type_)

        where, residual = self._where(rest, query_type)
        if where is not None:
            q = q.where(where)

        if sort_field:
            expr = self._sort_expr(sort_field)
            desc = sort_order is not None and SortOrder(sort_order) is SortOrder.DESC
            q = q.order_by((expr.desc() if desc else expr.asc()).nulls_first())
        q = q.order_by(ContentRow.created_ts)

        with self._new_session() as s:
            found = [
                dict(row.data)
                for (row,) in s.execute(q)
                if not residual or matches(row.data, rest, query_type)
            ]
        logger.debug("query %s %s -> %d rows", dict(conditions), query_type, len(found))
        return found

    # ---- writes ---------------------------------------------------------
    def create(self, type: str, values: Mapping[str, Any]) -> Record:
        uid = str(uuid.uuid4())
        data = {**dict(values), "uuid": uid}
        with self._new_session() as s:
            s.add(ContentRow(uuid=uid, content_type=type, data=data))
            s.commit()
        logger.debug("created %s %s", type, uid)
        return data

    def update(self, id: Union[str, int], values: Mapping[str, Any]) -> Optional[Record]:
        with self._new_session() as s:
            row = s.get(ContentRow, str(id))
            if row is None:
                logger.info("update: no record %s", id)
                return None
            # reassign so the JSON column is flagged dirty
            data = {**dict(row.data), **dict(values), "uuid": row.uuid}
            row.data = data
            s.commit()
        return data

    def delete(self, id: Union[str, int]) -> bool:
        with self._new_session() as s:
            row = s.get(ContentRow, str(id))
            if row is None:
                logger.warning("delete: no record %s", id)
                return False
            s.delete(row)
            s.commit()
        return True
