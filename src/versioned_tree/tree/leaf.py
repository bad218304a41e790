"""Leaf node: a single opaque scalar value."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from versioned_tree.tree.core import Node, NodeKind

__all__ = ["Leaf"]


class Leaf(Node):
    """Holds one scalar.  The value is stored as given and never inspected."""

    __slots__ = ("_value",)

    kind = NodeKind.LEAF

    def __init__(self, value: Any = None) -> None:
        super().__init__()
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        self._value = value
        self._core.bump()

    def children(self) -> Iterator[Node]:
        return iter(())

    def __repr__(self) -> str:
        return f"Leaf({self._value!r}, version={self.version})"
