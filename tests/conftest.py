"""Shared fixtures: every test starts from a default runtime config."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from versioned_tree import config as vt_config

_ENV_VARS = (
    "VERSIONED_TREE_LOG_LEVEL",
    "VERSIONED_TREE_CACHE_SIZE",
    "VERSIONED_TREE_CHECK_CYCLES",
)


@pytest.fixture(autouse=True)
def _default_runtime_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    vt_config.reset_runtime_config_cache()
    yield
    vt_config.reset_runtime_config_cache()
