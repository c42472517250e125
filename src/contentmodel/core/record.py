"""
ContentModel kernel – active-record style view over a content store.

* Field values live in an ordered ``values`` dict; nothing is schema-bound.
* Class-level operations take the store explicitly; instances they produce
  remember it for ``save`` / ``update`` / ``delete``.
* ``Article.findFirstByNameAndStatus("alice", "active", store=s)`` style
  finders are resolved by the metaclass (see ``core.finders``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, Field, PrivateAttr
from pydantic_core import to_json

from .. import events
from ..errors import StoreNotConfiguredError, UnsupportedFinderError
from ..persistence.base import QueryType, SortOrder, Store
from .finders import FinderQuery, parse_finder

logger = logging.getLogger(__name__)

T_Model = TypeVar("T_Model", bound="ContentModel")
ModelMeta = BaseModel.__class__


# metaclass that resolves dynamic finders
class ContentModelMeta(ModelMeta):
    """Turn unknown ``find…By…`` class attributes into query callables."""

    def __getattr__(cls, name: str):
        try:
            return super().__getattr__(name)
        except AttributeError:
            if not name.startswith("find"):
                raise

        query = parse_finder(name)
        if query is None:
            raise UnsupportedFinderError(cls.__name__, name)

        def finder(*args: Any, store: Store):
            return cls._run_finder(query, args, store=store)

        finder.__name__ = finder.__qualname__ = name
        return finder


# ContentModel base
class ContentModel(BaseModel, metaclass=ContentModelMeta):
    """A typed key/value record backed by a :class:`Store`."""

    type: str
    exists: bool = False
    values: Dict[Any, Any] = Field(default_factory=dict)

    _store: Optional[Store] = PrivateAttr(default=None)
    model_config = {"arbitrary_types_allowed": True}

    def __init__(
        self,
        type: str,
        exists: bool = False,
        values: Optional[Mapping[str, Any]] = None,
        *,
        store: Optional[Store] = None,
    ):
        super().__init__(type=type, exists=exists, values=dict(values or {}))
        self._store = store

    # ------------------------------------------------------------------ #
    # class-level operations
    # ------------------------------------------------------------------ #
    @classmethod
    def get_type(cls) -> str:
        """Store type tag: the class name without any enclosing scope."""
        return cls.__qualname__.rsplit(".", 1)[-1]

    @classmethod
    def find(
        cls: Type[T_Model],
        args: Union[str, int, Mapping[str, Any]],
        query_type: Union[QueryType, str] = QueryType.AND,
        sort_field: Optional[str] = None,
        sort_order: Union[SortOrder, str, None] = None,
        *,
        store: Store,
    ) -> Union[T_Model, List[T_Model], Any]:
        """
        Load by id (``str``/``int``) or query by a field ➜ value mapping.

        An id lookup returns one instance, or the store's failure value
        unchanged. A mapping returns a list (possibly empty). Anything else
        returns ``False``.
        """
        type_ = cls.get_type()
        if isinstance(args, (str, int)) and not isinstance(args, bool):
            loaded = store.load(args)
            if not isinstance(loaded, Mapping):
                return loaded
            return cls(type_, True, loaded, store=store)

        if isinstance(args, Mapping):
            conditions = {**args, "type": type_}
            rows = store.query(conditions, query_type, sort_field, sort_order)
            return [cls(type_, True, row, store=store) for row in rows or ()]

        logger.debug("find(%r) on %s: unsupported argument type", args, type_)
        return False

    @classmethod
    def update_attributes(
        cls, id: Union[str, int], values: Mapping[str, Any], *, store: Store
    ) -> Any:
        return store.update(id, dict(values))

    @classmethod
    def get_new(cls: Type[T_Model], *, store: Optional[Store] = None) -> T_Model:
        """Fresh, unsaved, empty instance."""
        return cls(cls.get_type(), store=store)

    @classmethod
    def create(
        cls: Type[T_Model], args: Mapping[str, Any], *, store: Store
    ) -> Union[T_Model, Any]:
        """Create and persist a record; use ``get_new`` to skip the store."""
        created = store.create(cls.get_type(), dict(args))
        if not isinstance(created, Mapping):
            return created
        obj = cls(cls.get_type(), True, created, store=store)
        events.emit("create", obj)
        return obj

    @classmethod
    def _run_finder(cls, query: FinderQuery, args: Sequence[Any], *, store: Store):
        conditions = query.conditions(args)
        logger.debug(
            "%s.%s -> %s %s", cls.__name__, query.name, conditions, query.query_type.value
        )
        found = cls.find(conditions, query.query_type, store=store)
        if query.first_only:
            return found[0] if found else False
        return found

    # ------------------------------------------------------------------ #
    # instance operations
    # ------------------------------------------------------------------ #
    @property
    def uuid(self) -> Any:
        return self.values.get("uuid")

    @property
    def store(self) -> Optional[Store]:
        return self._store

    def bind(self: T_Model, store: Store) -> T_Model:
        """Attach ``store`` to this instance and return it."""
        self._store = store
        return self

    def _require_store(self) -> Store:
        if self._store is None:
            raise StoreNotConfiguredError(
                f"{self.type} instance has no store; pass store= or call bind()"
            )
        return self._store

    def stringify(self) -> str:
        """Compact JSON document of the field values."""
        return to_json(self.values).decode()

    def __str__(self) -> str:
        return self.stringify()

    def get_values(self) -> Dict[str, Any]:
        return dict(self.values)

    def save(self) -> Any:
        """Update if persisted, otherwise create. Returns the store's result."""
        store = self._require_store()
        event = "update" if self.exists else "create"
        if self.exists:
            result = store.update(self.uuid, dict(self.values))
        else:
            result = store.create(self.type, dict(self.values))

        if isinstance(result, Mapping):
            self.values = dict(result)
            self.exists = True
            events.emit(event, self)
        else:
            logger.info("save of %s %s failed: %r", self.type, self.uuid, result)
        return result

    def delete(self) -> bool:
        if not self.exists:
            return False
        if self._require_store().delete(self.uuid):
            self.exists = False
            events.emit("delete", self)
            return True
        logger.info("delete of %s %s failed", self.type, self.uuid)
        return False

    def update(self: T_Model, values: Mapping[str, Any]) -> Union[T_Model, bool]:
        """Mass-update fields in the store and refresh from its answer."""
        if not self.exists:
            return False
        result = self.update_attributes(self.uuid, values, store=self._require_store())
        if not isinstance(result, Mapping):
            logger.info("update of %s %s failed: %r", self.type, self.uuid, result)
            return False
        self.values = dict(result)
        events.emit("update", self)
        return self

    # field access
    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self.values[name] = value

    def has(self, name: str) -> bool:
        return name in self.values

    def remove(self, name: str) -> None:
        self.values.pop(name, None)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __contains__(self, name: object) -> bool:
        return name in self.values
