"""TreeConfig frozen dataclass and the environment-driven runtime config.

``TreeConfig`` holds the few knobs the engine exposes.  ``runtime_config()``
builds one from ``VERSIONED_TREE_*`` environment variables on first use and
caches it; ``reset_runtime_config_cache()`` forces a re-read (tests use this
together with ``monkeypatch.setenv``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

__all__ = ["TreeConfig", "reset_runtime_config_cache", "runtime_config"]

_LOGGER_NAME = "versioned_tree"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


@dataclass(frozen=True, slots=True)
class TreeConfig:
    """Immutable runtime configuration.

    Attributes:
        log_level: Level name for the ``versioned_tree`` logger.
        cache_size: Default ``max_size`` of a ``VersionedCache``.  Must be > 0.
        check_cycles: When True, every attach walks the ancestor chain of the
            receiving container and rejects nodes that would end up inside
            their own subtree.  Disabling it trades that guard for O(1) attach,
            but only a direct self-store is still rejected: an ancestor stored
            under its own descendant forms a parent loop, and the next ``bump``
            anywhere on that loop never returns.  Leave it on unless the
            caller already guarantees acyclic inserts.
    """

    log_level: str = "WARNING"
    cache_size: int = 512
    check_cycles: bool = True

    def __post_init__(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}"
            raise ValueError(msg)
        if self.cache_size <= 0:
            msg = f"cache_size must be > 0, got {self.cache_size}"
            raise ValueError(msg)


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(raw: str | None, *, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"Invalid integer value {raw!r}"
        raise ValueError(msg) from exc


def _configure_logging(level: str) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> TreeConfig:
    """Return the process-wide ``TreeConfig`` read from the environment."""
    config = TreeConfig(
        log_level=os.getenv("VERSIONED_TREE_LOG_LEVEL", "WARNING").strip().upper(),
        cache_size=_parse_int(os.getenv("VERSIONED_TREE_CACHE_SIZE"), default=512),
        check_cycles=_bool_from_env(
            os.getenv("VERSIONED_TREE_CHECK_CYCLES"), default=True
        ),
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
