"""
Dynamic finder names ➜ query description.

    findBy<Field>[And<Field>…]          all matches, AND
    findFirstBy<Field>[Or<Field>…]      first match (or False), OR
    findAllBy<Field>                    all matches
    find_first_by_name_and_status       snake_case spelling of the above

And/Or are never mixed in one name. In camelCase names a `First` anywhere,
field chain included (`findByFirstName`), selects the first match; snake_case
names take the modifier from the prefix only.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..persistence.base import QueryType

_CAMEL_AND = re.compile(r"And(?=[A-Z])")
_CAMEL_OR = re.compile(r"Or(?=[A-Z])")


class Modifier(str, enum.Enum):
    NONE = ""
    FIRST = "First"
    ALL = "All"


@dataclass(frozen=True)
class FinderQuery:
    """Parsed finder: which fields, how to join them, what to return."""

    name: str
    fields: Tuple[str, ...]
    query_type: QueryType = QueryType.AND
    modifier: Modifier = Modifier.NONE

    @property
    def first_only(self) -> bool:
        return self.modifier is Modifier.FIRST

    def conditions(self, args: Sequence[Any]) -> Dict[str, Any]:
        """Pair each field with the positional argument at the same index."""
        if len(args) != len(self.fields):
            raise TypeError(
                f"{self.name}() takes {len(self.fields)} positional "
                f"argument(s) but {len(args)} were given"
            )
        return dict(zip(self.fields, args))


def _lcfirst(s: str) -> str:
    return s[:1].lower() + s[1:]


def _parse_camel(name: str) -> Optional[FinderQuery]:
    prefix, sep, chain = name.partition("By")
    if not sep:
        return None

    # modifiers are looked up anywhere in the name, field chain included
    modifier = Modifier.NONE
    if "First" in name:
        modifier = Modifier.FIRST
    elif "All" in name:
        modifier = Modifier.ALL
    # First is stripped before All
    verb = prefix.replace("First", "").replace("All", "")
    if verb != "find" or not chain:
        return None

    and_fields = _CAMEL_AND.split(chain)
    or_fields = _CAMEL_OR.split(chain)
    if len(and_fields) > 1:
        fields, qtype = and_fields, QueryType.AND
    elif len(or_fields) > 1:
        fields, qtype = or_fields, QueryType.OR
    else:
        fields, qtype = [chain], QueryType.AND

    if not all(fields):
        return None
    return FinderQuery(name, tuple(_lcfirst(f) for f in fields), qtype, modifier)


def _parse_snake(name: str) -> Optional[FinderQuery]:
    prefix, sep, chain = name.partition("_by_")
    if not sep or not chain:
        return None

    modifiers = {
        "find": Modifier.NONE,
        "find_first": Modifier.FIRST,
        "find_all": Modifier.ALL,
    }
    if prefix not in modifiers:
        return None

    and_fields = chain.split("_and_")
    or_fields = chain.split("_or_")
    if len(and_fields) > 1:
        fields, qtype = and_fields, QueryType.AND
    elif len(or_fields) > 1:
        fields, qtype = or_fields, QueryType.OR
    else:
        fields, qtype = [chain], QueryType.AND

    if not all(fields):
        return None
    return FinderQuery(name, tuple(fields), qtype, modifiers[prefix])


def parse_finder(name: str) -> Optional[FinderQuery]:
    """Return the parsed finder for ``name`` or ``None`` if it is not one."""
    if not name.startswith("find"):
        return None
    if name.startswith("find_"):
        return _parse_snake(name)
    return _parse_camel(name)
