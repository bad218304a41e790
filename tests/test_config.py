"""Tests for TreeConfig and the environment-driven runtime config.

Covers:
- Default values and immutability (FrozenInstanceError on assignment)
- Validation of log_level and cache_size
- Environment parsing, including boolean spellings and bad integers
- Caching of runtime_config() and reset_runtime_config_cache()
"""

from __future__ import annotations

import logging
from dataclasses import FrozenInstanceError

import pytest

from versioned_tree import config as vt_config
from versioned_tree.config import TreeConfig

# ---------------------------------------------------------------------------
# TreeConfig
# ---------------------------------------------------------------------------


class TestTreeConfigDefaults:
    def test_defaults(self) -> None:
        config = TreeConfig()
        assert config.log_level == "WARNING"
        assert config.cache_size == 512
        assert config.check_cycles is True

    def test_is_frozen(self) -> None:
        config = TreeConfig()
        with pytest.raises(FrozenInstanceError):
            config.cache_size = 1  # type: ignore[misc]

    def test_check_cycles_docs_warn_that_bump_can_loop(self) -> None:
        doc = TreeConfig.__doc__ or ""
        assert "check_cycles" in doc
        assert "never returns" in doc


class TestTreeConfigValidation:
    def test_unknown_log_level_raises(self) -> None:
        with pytest.raises(ValueError, match="log_level"):
            TreeConfig(log_level="LOUD")

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_cache_size_raises(self, size: int) -> None:
        with pytest.raises(ValueError, match="cache_size"):
            TreeConfig(cache_size=size)


# ---------------------------------------------------------------------------
# runtime_config
# ---------------------------------------------------------------------------


class TestRuntimeConfig:
    def test_defaults_without_environment(self) -> None:
        assert vt_config.runtime_config() == TreeConfig()

    def test_log_level_override_is_case_insensitive(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VERSIONED_TREE_LOG_LEVEL", "debug")
        vt_config.reset_runtime_config_cache()
        assert vt_config.runtime_config().log_level == "DEBUG"
        assert logging.getLogger("versioned_tree").level == logging.DEBUG

    def test_cache_size_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONED_TREE_CACHE_SIZE", "64")
        vt_config.reset_runtime_config_cache()
        assert vt_config.runtime_config().cache_size == 64

    def test_invalid_cache_size_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONED_TREE_CACHE_SIZE", "lots")
        vt_config.reset_runtime_config_cache()
        with pytest.raises(ValueError, match="Invalid integer"):
            vt_config.runtime_config()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("0", False), ("off", False), ("no", False), ("1", True), ("YES", True), ("maybe", True)],
    )
    def test_check_cycles_parsing(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        monkeypatch.setenv("VERSIONED_TREE_CHECK_CYCLES", raw)
        vt_config.reset_runtime_config_cache()
        assert vt_config.runtime_config().check_cycles is expected

    def test_result_is_cached_until_reset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = vt_config.runtime_config()
        monkeypatch.setenv("VERSIONED_TREE_CACHE_SIZE", "8")
        assert vt_config.runtime_config() is first
        vt_config.reset_runtime_config_cache()
        assert vt_config.runtime_config().cache_size == 8
