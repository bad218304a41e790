"""Loggers for the ``versioned_tree`` package.

Everything logs under children of the ``versioned_tree`` logger:
``versioned_tree.tree`` for invariant faults raised by the tree engine,
``versioned_tree.builder`` for finished ``TreeBuilder`` results,
``versioned_tree.cache`` for ``VersionedCache`` recomputations and
``versioned_tree.codec`` for calls into the unimplemented codec.  All of it is
DEBUG and stays silent at the default ``VERSIONED_TREE_LOG_LEVEL`` of WARNING.
"""

from __future__ import annotations

import logging

from versioned_tree import config as vt_config


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``versioned_tree`` logger, or a child named ``name``."""
    logger_name = "versioned_tree" if name is None else f"versioned_tree.{name}"
    runtime = vt_config.runtime_config()
    logger = logging.getLogger(logger_name)
    logger.setLevel(runtime.log_level)
    return logger
