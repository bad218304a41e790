"""Sequence node: ordered, resizable, sliceable slots of optional child nodes.

A ``Sequence`` is a window ``(offset, length, capacity)`` over a backing list.
Views (``view``, ``view3``, ``seq[i:j]``) and the results of ``append`` are new
``Sequence`` objects that share the backing list *and* the ``VersionCore`` of
their source, so a write through any of them bumps the one shared version.

Growth follows resizable-array semantics:
- ``append`` within capacity writes into the shared backing list in place, so
  other views over the same storage see the new values;
- ``append`` beyond capacity copies into a new backing list of capacity
  ``max(needed, 2 * capacity)``; older views keep the old storage but still
  share the version core.

Indexes are never wrapped: negative or too-large indexes are invariant
violations, not Python-style offsets from the end.
"""

from __future__ import annotations

import operator
from collections.abc import Iterator
from typing import overload

from versioned_tree.tree.core import (
    Node,
    NodeKind,
    VersionCore,
    check_attachable,
    check_batch,
    check_owned,
    creates_cycle,
    fault,
)

__all__ = ["Sequence", "move_all_into"]


class Sequence(Node):
    """Ordered container of optional child nodes.

    Example::

        seq = Sequence(2)
        seq.set(0, Leaf(1))
        tail = seq.append(Leaf(2))   # len(tail) == 3, len(seq) == 2
        assert seq.version == tail.version == 3
    """

    __slots__ = ("_capacity", "_length", "_offset", "_storage")

    kind = NodeKind.SEQUENCE

    def __init__(self, length: int = 0, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = length
        if length < 0:
            msg = f"length must be >= 0, got {length}"
            raise ValueError(msg)
        if capacity < length:
            msg = f"capacity must be >= length ({length}), got {capacity}"
            raise ValueError(msg)
        super().__init__()
        self._storage: list[Node | None] = [None] * capacity
        self._offset = 0
        self._length = length
        self._capacity = capacity

    @classmethod
    def of(cls, *values: Node | None) -> Sequence:
        """Build a sequence holding ``values``; the result is at version 1."""
        seq = cls(len(values))
        nodes = check_batch(seq._core, values)
        for node in nodes:
            if node is not None:
                node._core.attach(seq._core)
        seq._storage[:] = nodes
        return seq

    @classmethod
    def _window(
        cls,
        core: VersionCore,
        storage: list[Node | None],
        offset: int,
        length: int,
        capacity: int,
    ) -> Sequence:
        seq = cls.__new__(cls)
        seq._core = core
        seq._storage = storage
        seq._offset = offset
        seq._length = length
        seq._capacity = capacity
        return seq

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._length

    def _position(self, i: int) -> int:
        i = operator.index(i)
        if not 0 <= i < self._length:
            raise fault(f"index {i} out of range [0, {self._length})")
        return self._offset + i

    def get(self, i: int) -> Node | None:
        return self._storage[self._position(i)]

    def __iter__(self) -> Iterator[Node | None]:
        start = self._offset
        return iter(self._storage[start : start + self._length])

    def __contains__(self, node: object) -> bool:
        return any(slot is node for slot in self)

    def children(self) -> Iterator[Node]:
        return (slot for slot in self if slot is not None)

    @overload
    def __getitem__(self, key: int) -> Node | None: ...

    @overload
    def __getitem__(self, key: slice) -> Sequence: ...

    def __getitem__(self, key: int | slice) -> Node | None | Sequence:
        if isinstance(key, slice):
            if key.step is not None:
                raise fault("sequence views do not support a step")
            start = 0 if key.start is None else key.start
            stop = self._length if key.stop is None else key.stop
            return self.view(start, stop)
        return self.get(key)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, i: int, value: Node | None) -> None:
        """Store ``value`` at ``i``, detaching the previous occupant."""
        pos = self._position(i)
        prev = self._storage[pos]
        if prev is not None:
            check_owned(self._core, prev)
        node = check_attachable(self._core, value, current=prev)
        if prev is not None:
            prev._core.detach(self._core)
        if node is not None:
            node._core.attach(self._core)
        self._storage[pos] = node
        self._core.bump()

    def __setitem__(self, i: int, value: Node | None) -> None:
        if isinstance(i, slice):
            msg = "slice assignment is not supported; use view() and set()"
            raise TypeError(msg)
        self.set(i, value)

    def view(self, i: int, j: int) -> Sequence:
        """Return a view over ``[i, j)``; ``j`` may reach up to ``capacity``."""
        i, j = operator.index(i), operator.index(j)
        if not 0 <= i <= j <= self._capacity:
            raise fault(f"view bounds [{i}:{j}] invalid for capacity {self._capacity}")
        return Sequence._window(
            self._core, self._storage, self._offset + i, j - i, self._capacity - i
        )

    def view3(self, i: int, j: int, k: int) -> Sequence:
        """Like ``view`` but with the view's capacity capped at ``k - i``."""
        i, j, k = operator.index(i), operator.index(j), operator.index(k)
        if not 0 <= i <= j <= k <= self._capacity:
            raise fault(
                f"view bounds [{i}:{j}:{k}] invalid for capacity {self._capacity}"
            )
        return Sequence._window(
            self._core, self._storage, self._offset + i, j - i, k - i
        )

    def append(self, *values: Node | None) -> Sequence:
        """Return a longer sequence ending in ``values``; bumps the shared core once.

        The receiver keeps its own length.  Nodes are attached to the shared
        core.  In-place growth detaches whatever occupied the overwritten
        backing slots it owns; slots a reallocation left behind may list nodes
        that now belong elsewhere, and those are overwritten without a detach.
        """
        nodes = check_batch(self._core, values)
        length = self._length + len(nodes)
        if length <= self._capacity:
            storage, offset, capacity = self._storage, self._offset, self._capacity
            start = offset + self._length
            displaced = [
                slot
                for slot in storage[start : start + len(nodes)]
                if slot is not None and slot._core.parent is self._core
            ]
        else:
            capacity = max(length, 2 * self._capacity)
            storage = list(self)
            storage.extend([None] * (capacity - self._length))
            offset, start = 0, self._length
            displaced = []

        for prev in displaced:
            prev._core.detach(self._core)
        for node in nodes:
            if node is not None:
                node._core.attach(self._core)
        storage[start : start + len(nodes)] = nodes
        self._core.bump()
        return Sequence._window(self._core, storage, offset, length, capacity)

    def __repr__(self) -> str:
        return (
            f"Sequence(len={self._length}, capacity={self._capacity}, "
            f"version={self.version})"
        )


def move_all_into(dst: Sequence, src: Sequence) -> None:
    """Move every node of ``src`` into the same index of ``dst``.

    Source slots are cleared and the previous occupants of ``dst`` are
    detached.  ``src`` and then ``dst`` are bumped once each, after the whole
    move.  The sequences must have equal lengths, and every node listed in
    either window must still belong to that window's sequence; all of this is
    checked before the first slot changes.
    """
    if not isinstance(dst, Sequence) or not isinstance(src, Sequence):
        msg = "move_all_into expects two Sequence nodes"
        raise TypeError(msg)
    if len(dst) != len(src):
        raise fault(f"move_all_into length mismatch: dst={len(dst)}, src={len(src)}")

    moved = list(src)
    same_core = dst._core is src._core
    for node in moved:
        if node is None:
            continue
        check_owned(src._core, node)
        if not same_core and creates_cycle(node, dst._core):
            raise fault("node can not be stored inside its own subtree")
    moved_ids = {id(node) for node in moved if node is not None}
    displaced = [slot for slot in dst if slot is not None and id(slot) not in moved_ids]
    for prev in displaced:
        check_owned(dst._core, prev)

    for prev in displaced:
        prev._core.detach(dst._core)
    if not same_core:
        for node in moved:
            if node is not None:
                node._core.detach(src._core)
                node._core.attach(dst._core)

    src._storage[src._offset : src._offset + len(src)] = [None] * len(src)
    dst._storage[dst._offset : dst._offset + len(dst)] = moved
    src._core.bump()
    dst._core.bump()
