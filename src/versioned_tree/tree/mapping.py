"""Map node: string-keyed entries of optional child nodes.

An absent key and a key mapped to ``None`` are different states; use
``get_with_presence`` to tell them apart.  ``delete`` always bumps the version,
even when the key was absent, so every delete call is an observable change.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, Mapping

from versioned_tree.tree.core import (
    Node,
    NodeKind,
    check_attachable,
    check_batch,
    check_owned,
)

__all__ = ["Map"]


def _require_str_key(key: object) -> str:
    if not isinstance(key, str):
        msg = f"map keys must be str, got {type(key).__name__}"
        raise TypeError(msg)
    return key


class Map(Node):
    """Unordered container mapping ``str`` keys to optional child nodes."""

    __slots__ = ("_entries",)

    kind = NodeKind.MAP

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, Node | None] = {}

    @classmethod
    def of(cls, entries: Mapping[str, Node | None]) -> Map:
        """Build a map holding ``entries``; the result is at version 1."""
        mapping = cls()
        keys = [_require_str_key(key) for key in entries]
        nodes = check_batch(mapping._core, entries.values())
        for key, node in zip(keys, nodes, strict=True):
            if node is not None:
                node._core.attach(mapping._core)
            mapping._entries[key] = node
        return mapping

    def get(self, key: str) -> Node | None:
        return self._entries.get(key)

    def get_with_presence(self, key: str) -> tuple[Node | None, bool]:
        if key in self._entries:
            return self._entries[key], True
        return None, False

    def set(self, key: str, value: Node | None) -> None:
        """Insert or overwrite ``key``, detaching the previous occupant."""
        key = _require_str_key(key)
        prev = self._entries.get(key)
        if prev is not None:
            check_owned(self._core, prev)
        node = check_attachable(self._core, value, current=prev)
        if prev is not None:
            prev._core.detach(self._core)
        if node is not None:
            node._core.attach(self._core)
        self._entries[key] = node
        self._core.bump()

    def delete(self, key: str) -> None:
        """Remove ``key``; bumps even when the key was absent."""
        prev = self._entries.get(key)
        if prev is not None:
            check_owned(self._core, prev)
            prev._core.detach(self._core)
        self._entries.pop(key, None)
        self._core.bump()

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def items(self) -> ItemsView[str, Node | None]:
        return self._entries.items()

    def children(self) -> Iterator[Node]:
        return (node for node in self._entries.values() if node is not None)

    # Mapping-style sugar over get / set / delete.
    def __getitem__(self, key: str) -> Node | None:
        return self.get(key)

    def __setitem__(self, key: str, value: Node | None) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Map(len={len(self._entries)}, version={self.version})"
