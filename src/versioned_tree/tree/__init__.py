"""Tree subpackage: the versioned node types and their builders.

Re-exports the public API for the tree module:
- Node: abstract base of every node (version, attachment state)
- NodeKind: StrEnum of the three node kinds (SEQUENCE, MAP, LEAF)
- Sequence: ordered, sliceable container; move_all_into moves between sequences
- Map: string-keyed container
- Leaf: single scalar value
- TreeBuilder / to_python: conversion from and to plain Python values
"""

from versioned_tree.tree.builder import TreeBuilder, to_python
from versioned_tree.tree.core import Node, NodeKind
from versioned_tree.tree.leaf import Leaf
from versioned_tree.tree.mapping import Map
from versioned_tree.tree.sequence import Sequence, move_all_into

__all__ = [
    "Leaf",
    "Map",
    "Node",
    "NodeKind",
    "Sequence",
    "TreeBuilder",
    "move_all_into",
    "to_python",
]
