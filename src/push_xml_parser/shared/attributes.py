"""Attribute list handed to ``start_element`` callbacks."""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import StructuralError


class AttributeList(Mapping):
    """Ordered, read-only mapping of attribute names to values.

    Besides the ``Mapping`` protocol, the list carries a restartable cursor
    over its entries, for handlers written against an enumeration interface::

        attrs.reset()
        while attrs.move_next():
            name, value = attrs.element

    A fresh list is built for every start tag and is only valid for the
    duration of the callback; handlers that keep attributes must copy them.
    """

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}
        self._entries: List[Tuple[str, str]] = []
        self._cursor = -1

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "AttributeList":
        """Build a list from ``(name, value)`` pairs, rejecting duplicates."""
        attrs = cls()
        for name, value in pairs:
            attrs.add(name, value)
        return attrs

    def add(self, name: str, value: str) -> None:
        """Append an attribute. Used only while the start tag is being parsed.

        Raises:
            StructuralError: If ``name`` is already present
        """
        if name in self._items:
            raise StructuralError(f"duplicate attribute '{name}'")
        self._items[name] = value
        self._entries.append((name, value))
        self._cursor = -1

    def __getitem__(self, name: str) -> str:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"AttributeList({self._items!r})"

    def entries(self) -> Iterator[Tuple[str, str]]:
        """Iterate over ``(name, value)`` pairs in document order."""
        return iter(self._entries)

    # Cursor protocol

    def reset(self) -> None:
        """Move the cursor back before the first entry."""
        self._cursor = -1

    def at_start(self) -> bool:
        return self._cursor == -1

    def move_next(self) -> bool:
        """Advance the cursor; return False once the entries are exhausted."""
        if self._cursor < len(self._entries):
            self._cursor += 1
        return self.current_element_valid()

    def current_element_valid(self) -> bool:
        return 0 <= self._cursor < len(self._entries)

    @property
    def element(self) -> Tuple[str, str]:
        """The ``(name, value)`` pair under the cursor.

        Raises:
            IndexError: If the cursor is not on an entry
        """
        if not self.current_element_valid():
            raise IndexError("attribute cursor is not on an entry")
        return self._entries[self._cursor]

    def current(self) -> Optional[Tuple[str, str]]:
        """The pair under the cursor, or None when the cursor is off the list."""
        if not self.current_element_valid():
            return None
        return self._entries[self._cursor]
