"""VersionCore, the Node base class and the attach/detach validation helpers.

Every node embeds a ``VersionCore``: a version counter plus a back reference to
the *core* of the container holding the node.  Containers own their children
through their slot storage; a core never references children, so the parent
link is a plain non-owning reference and forms no reference cycle.

A ``Sequence`` and all of its views share one core.  They are therefore one
attachable entity: a single ``parent`` field and a single version counter.

Propagation walks parent links in a loop rather than recursing, so deep trees
do not consume Python stack frames.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from enum import StrEnum, auto
from typing import ClassVar

from versioned_tree.config import runtime_config
from versioned_tree.errors import InvariantViolation
from versioned_tree.logging import get_logger

__all__ = ["Node", "NodeKind", "VersionCore"]


def fault(message: str) -> InvariantViolation:
    """Log ``message`` and return the ``InvariantViolation`` to raise."""
    get_logger("tree").debug("invariant violation: %s", message)
    return InvariantViolation(message)


class NodeKind(StrEnum):
    """The three node variants.

    - SEQUENCE -> "sequence" : ordered, index-addressable slots
    - MAP      -> "map"      : string-keyed entries
    - LEAF     -> "leaf"     : a single opaque scalar
    """

    SEQUENCE = auto()
    MAP = auto()
    LEAF = auto()


class VersionCore:
    """Version counter and parent link shared by a node (and its views).

    Attributes:
        version: Starts at 1 and only ever grows, one step per ``bump()``.
        parent:  Core of the containing node, or None when detached.
    """

    __slots__ = ("parent", "version")

    def __init__(self) -> None:
        self.version: int = 1
        self.parent: VersionCore | None = None

    def attach(self, parent: VersionCore) -> None:
        if self.parent is not None:
            raise fault("node can not have multiple parents")
        self.parent = parent

    def detach(self, parent: VersionCore) -> None:
        """Clear the parent link, which must point at ``parent``."""
        if self.parent is None:
            raise fault("detach of a node that has no parent")
        if self.parent is not parent:
            raise fault("detach of a node held by a different parent")
        self.parent = None

    def bump(self) -> None:
        core: VersionCore | None = self
        while core is not None:
            core.version += 1
            core = core.parent

    def encloses(self, other: VersionCore) -> bool:
        """True when ``other`` is this core or sits anywhere below it."""
        core: VersionCore | None = other
        while core is not None:
            if core is self:
                return True
            core = core.parent
        return False

    @property
    def depth(self) -> int:
        depth = 0
        core = self.parent
        while core is not None:
            depth += 1
            core = core.parent
        return depth


class Node(ABC):
    """Base class of ``Sequence``, ``Map`` and ``Leaf``.

    Nodes are created detached at version 1.  They become attached only by
    being stored in a container slot, and detached only by being removed or
    overwritten there.  Equality is identity.
    """

    __slots__ = ("_core",)

    kind: ClassVar[NodeKind]

    def __init__(self) -> None:
        self._core = VersionCore()

    @property
    def version(self) -> int:
        """Current version; grows whenever this node or a descendant changes."""
        return self._core.version

    @property
    def is_attached(self) -> bool:
        return self._core.parent is not None

    @property
    def depth(self) -> int:
        """Number of ancestors above this node (0 for a root)."""
        return self._core.depth

    def shares_core_with(self, other: Node) -> bool:
        """True when both nodes share one version core (a sequence and its views)."""
        return self._core is other._core

    @abstractmethod
    def children(self) -> Iterator[Node]:
        """Yield the non-empty child nodes held directly by this node."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.version})"


def creates_cycle(node: Node, container: VersionCore) -> bool:
    """True when storing ``node`` under ``container`` would close a loop.

    Storing a node into itself is always caught; the full ancestor walk only
    runs when ``check_cycles`` is enabled.
    """
    if node._core is container:
        return True
    return runtime_config().check_cycles and node._core.encloses(container)


def check_attachable(
    container: VersionCore, value: object, current: Node | None = None
) -> Node | None:
    """Validate that ``value`` may be stored in a slot of ``container``.

    ``current`` is the node presently occupying the slot; re-storing it (or a
    node sharing its core) is allowed.  Returns ``value`` typed as a node.

    Raises:
        TypeError: ``value`` is neither a Node nor None.
        InvariantViolation: ``value`` is attached elsewhere, or storing it
            would place a node inside its own subtree.
    """
    if value is None:
        return None
    if not isinstance(value, Node):
        msg = f"expected a Node or None, got {type(value).__name__}"
        raise TypeError(msg)
    if current is not None and current._core is value._core:
        return value
    if value._core.parent is not None:
        raise fault("node can not have multiple parents")
    if creates_cycle(value, container):
        raise fault("node can not be stored inside its own subtree")
    return value


def check_owned(container: VersionCore, node: Node) -> None:
    """Raise unless ``node`` is currently attached to ``container``.

    Slots in storage left behind by a reallocating ``append`` can still list a
    node that has since moved elsewhere; removing it through such a slot must
    not touch the new owner's link.
    """
    if node._core.parent is None:
        raise fault("detach of a node that has no parent")
    if node._core.parent is not container:
        raise fault("detach of a node held by a different parent")


def check_batch(container: VersionCore, values: Iterable[object]) -> list[Node | None]:
    """Validate several values bound for fresh slots of ``container``."""
    nodes: list[Node | None] = []
    seen: set[int] = set()
    for value in values:
        node = check_attachable(container, value)
        if node is not None:
            if id(node._core) in seen:
                raise fault("node can not be stored twice in one operation")
            seen.add(id(node._core))
        nodes.append(node)
    return nodes
