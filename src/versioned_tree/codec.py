"""Serialization boundary: byte encoding of a node tree.

Declared but not implemented.  Both functions raise
``CodecNotImplementedError`` unconditionally; callers must not rely on them.

Contract for an implementation:
- ``decode(encode(root))`` reproduces the tree shape (Sequence / Map / Leaf,
  empty slots, keys mapped to no node) and every scalar value.
- Version numbers and parent links are runtime-only state and are not encoded;
  a decoded tree starts detached at version 1 everywhere.

For in-process conversion to and from plain Python values, use
``versioned_tree.tree.builder``.
"""

from __future__ import annotations

from versioned_tree.errors import CodecNotImplementedError
from versioned_tree.logging import get_logger
from versioned_tree.tree.core import Node

__all__ = ["decode", "encode"]


def _not_implemented(operation: str) -> CodecNotImplementedError:
    get_logger("codec").debug("%s called on the unimplemented codec", operation)
    return CodecNotImplementedError(f"versioned_tree.codec.{operation} is not implemented")


def encode(root: Node) -> bytes:
    raise _not_implemented("encode")


def decode(data: bytes) -> Node:
    raise _not_implemented("decode")
