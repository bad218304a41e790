"""VersionedCache: LRU-backed memoisation of values derived from tree nodes.

Wraps a function of one node and remembers its result per node, together with
the node's version at computation time.  A later call returns the stored result
only if the node's version is unchanged; any mutation in the node's subtree
bumps that version and forces a recomputation.  LRU eviction occurs silently
when ``max_size`` is exceeded.

Entries are keyed by node identity.  A sequence and its views share a version
but not their contents, so each view gets its own entry.  Each entry keeps a
strong reference to its node, so an identity can not be reused by a new object
while it is cached.

Each ``VersionedCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    from versioned_tree import TreeBuilder, VersionedCache, to_python

    tree = TreeBuilder().build({"a": [1, 2, 3]})
    snapshot = VersionedCache(to_python)

    snapshot(tree)             # computed
    snapshot(tree)             # served from memory
    tree.get("a").set(0, None)
    snapshot(tree)             # version changed, recomputed
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from cachetools import LRUCache

from versioned_tree.config import runtime_config
from versioned_tree.logging import get_logger
from versioned_tree.tree.core import Node

__all__ = ["VersionedCache"]

T = TypeVar("T")


class VersionedCache(Generic[T]):
    """Memoises ``func(node)`` until the node's version changes.

    Args:
        func: Pure function of a node.  It should not mutate the tree; if it
            does, the stored result is treated as stale on the next call.
        max_size: Maximum number of nodes to hold results for.  Defaults to
            ``runtime_config().cache_size``.  When exceeded, the
            least-recently-used entry is silently evicted.
    """

    def __init__(self, func: Callable[[Node], T], max_size: int | None = None) -> None:
        size = runtime_config().cache_size if max_size is None else max_size
        if size <= 0:
            msg = f"max_size must be > 0, got {size}"
            raise ValueError(msg)
        self._func = func
        self._cache: LRUCache[int, tuple[Node, int, T]] = LRUCache(maxsize=size)
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __call__(self, node: Node) -> T:
        """Return ``func(node)``, recomputing only if ``node`` changed."""
        entry = self._cache.get(id(node))
        if entry is not None and entry[0] is node and entry[1] == node.version:
            self._hits += 1
            return entry[2]

        self._misses += 1
        # Version as of before func runs.
        version = node.version
        result = self._func(node)
        self._cache[id(node)] = (node, version, result)
        get_logger("cache").debug(
            "recomputed %r at version %d (%d cached)", node, version, self.curr_size
        )
        return result

    def invalidate(self, node: Node) -> None:
        """Drop the stored result for ``node``, if any."""
        self._cache.pop(id(node), None)

    def clear(self) -> None:
        self._cache.clear()
