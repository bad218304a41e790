"""TreeBuilder: converts plain Python / JSON values into a versioned node tree.

Uses recursive dispatch to convert dicts, lists, and scalar values into
``Map``, ``Sequence`` and ``Leaf`` nodes.  Containers are filled through
``Sequence.of`` / ``Map.of`` before they are exposed, so every node of a
freshly built tree is at version 1.

``to_python`` is the inverse: it turns a node tree back into plain values.
Version numbers and parent links are runtime state and are not part of either
representation.

JSON Pointer paths (RFC 6901) are tracked during building and only used to
report where an unsupported value was found:
- Root is "" (empty string)
- Each level appends "/{key_or_index}"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from versioned_tree.logging import get_logger
from versioned_tree.tree.core import Node
from versioned_tree.tree.leaf import Leaf
from versioned_tree.tree.mapping import Map
from versioned_tree.tree.sequence import Sequence

__all__ = ["TreeBuilder", "to_python"]

# Type alias for values the builder accepts
PlainValue = dict[str, Any] | list[Any] | tuple[Any, ...] | str | int | float | bool | None


@dataclass
class TreeBuilder:
    """Converts plain Python values into a tree of versioned nodes.

    Dispatch:
        dict            -> Map (keys must be str)
        list / tuple    -> Sequence
        bool, int, float, str, None -> Leaf

    ``None`` becomes ``Leaf(None)`` rather than an empty slot, so the shape of
    the input is preserved exactly.

    Example::
        tree = TreeBuilder().build({"items": [1, 2]})
        # tree: Map -> "items": Sequence -> Leaf(1), Leaf(2)
    """

    def build(self, value: PlainValue) -> Node:
        """Convert ``value`` to a node tree.

        Raises:
            TypeError: If ``value`` (or anything inside it) is not a supported
                type, or a dict has a non-str key.
        """
        root = self._build(value, "")
        get_logger("builder").debug("built %s tree from %s", root.kind, type(value).__name__)
        return root

    def _build(self, value: Any, path: str) -> Node:
        if isinstance(value, dict):
            return self._build_map(value, path)

        if isinstance(value, (list, tuple)):
            return Sequence.of(
                *(self._build(item, f"{path}/{idx}") for idx, item in enumerate(value))
            )

        if value is None or isinstance(value, (bool, int, float, str)):
            return Leaf(value)

        msg = f"Unsupported value type {type(value)!r} at {path!r}"
        raise TypeError(msg)

    def _build_map(self, obj: dict[Any, Any], path: str) -> Map:
        entries: dict[str, Node | None] = {}
        for key, val in obj.items():
            if not isinstance(key, str):
                msg = f"Map keys must be str, got {type(key)!r} at {path!r}"
                raise TypeError(msg)
            entries[key] = self._build(val, f"{path}/{key}")
        return Map.of(entries)


def to_python(node: Node | None) -> Any:
    """Convert a node tree back into plain dicts, lists and scalars.

    Empty sequence slots and keys mapped to no node become ``None``.
    """
    if node is None:
        return None
    if isinstance(node, Leaf):
        return node.value
    if isinstance(node, Sequence):
        return [to_python(child) for child in node]
    if isinstance(node, Map):
        return {key: to_python(child) for key, child in node.items()}
    msg = f"Unsupported node type {type(node)!r}"
    raise TypeError(msg)
