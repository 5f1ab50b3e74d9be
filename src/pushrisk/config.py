"""Configuration for callers that run the engine as a subprocess.

The engine itself reads no environment and no files; everything here is the
caller's concern.
"""

from __future__ import annotations

import os
import shlex
import sys
from typing import Mapping

from pydantic import BaseModel, Field

from pushrisk.exceptions import ConfigError

ENGINE_BIN_ENV = "PUSHRISK_ENGINE_BIN"
TIMEOUT_ENV = "PUSHRISK_TIMEOUT_MS"
DEFAULT_TIMEOUT_MS = 5000


def _default_command() -> list[str]:
    return [sys.executable, "-m", "pushrisk"]


class EngineConfig(BaseModel):
    """How to spawn the engine and how long to wait for it."""

    command: list[str] = Field(default_factory=_default_command)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


def load_engine_config(environ: Mapping[str, str] | None = None) -> EngineConfig:
    """Build the client config, applying environment overrides."""
    env = os.environ if environ is None else environ
    config = EngineConfig()

    command = env.get(ENGINE_BIN_ENV, "").strip()
    if command:
        config.command = shlex.split(command)

    raw_timeout = env.get(TIMEOUT_ENV, "").strip()
    if raw_timeout:
        try:
            timeout_ms = int(raw_timeout)
        except ValueError:
            raise ConfigError(f"{TIMEOUT_ENV} must be an integer, got {raw_timeout!r}")
        if timeout_ms <= 0:
            raise ConfigError(f"{TIMEOUT_ENV} must be positive, got {timeout_ms}")
        config.timeout_ms = timeout_ms

    return config
