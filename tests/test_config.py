"""Tests for engine client configuration."""

from __future__ import annotations

import sys

import pytest

from pushrisk.config import DEFAULT_TIMEOUT_MS, EngineConfig, load_engine_config
from pushrisk.exceptions import ConfigError


class TestEngineConfig:
    def test_defaults(self):
        config = load_engine_config({})
        assert config.command == [sys.executable, "-m", "pushrisk"]
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS
        assert config.timeout_seconds == DEFAULT_TIMEOUT_MS / 1000

    def test_engine_bin_override(self):
        config = load_engine_config({"PUSHRISK_ENGINE_BIN": "/opt/bin/pushrisk-engine --quiet"})
        assert config.command == ["/opt/bin/pushrisk-engine", "--quiet"]

    def test_timeout_override(self):
        config = load_engine_config({"PUSHRISK_TIMEOUT_MS": "250"})
        assert config.timeout_ms == 250

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_bad_timeout(self, value: str):
        with pytest.raises(ConfigError):
            load_engine_config({"PUSHRISK_TIMEOUT_MS": value})

    def test_blank_values_ignored(self):
        config = load_engine_config({"PUSHRISK_ENGINE_BIN": "  ", "PUSHRISK_TIMEOUT_MS": ""})
        assert config == EngineConfig()

    def test_model_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            EngineConfig(timeout_ms=0)
