"""Versioned tree - mutable node trees with version propagation to the root."""

from __future__ import annotations

from versioned_tree.cache import VersionedCache
from versioned_tree.codec import decode, encode
from versioned_tree.config import TreeConfig
from versioned_tree.errors import CodecNotImplementedError, InvariantViolation
from versioned_tree.tree import (
    Leaf,
    Map,
    Node,
    NodeKind,
    Sequence,
    TreeBuilder,
    move_all_into,
    to_python,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "CodecNotImplementedError",
    "InvariantViolation",
    "Leaf",
    "Map",
    "Node",
    "NodeKind",
    "Sequence",
    "TreeBuilder",
    "TreeConfig",
    "VersionedCache",
    "decode",
    "encode",
    "move_all_into",
    "to_python",
]
