"""Exception types raised by the versioned tree engine.

Both kinds signal caller bugs rather than recoverable conditions:

- ``InvariantViolation``: a precondition of a tree operation was broken
  (double attach, detach of a detached node, out-of-bounds index, malformed
  view range, mismatched bulk move, or an attach that would create a cycle).
  The operation is rejected before any state is mutated.
- ``CodecNotImplementedError``: the byte-level codec was invoked; it has no
  implementation yet.
"""

from __future__ import annotations

__all__ = ["CodecNotImplementedError", "InvariantViolation"]


class InvariantViolation(RuntimeError):
    """A tree operation was called in a way that breaks a structural invariant."""


class CodecNotImplementedError(NotImplementedError):
    """The serialization boundary was invoked but has no implementation."""
