"""Run the engine as a subprocess and degrade gracefully on failure.

This is the caller side of the process contract. A failed scoring pass must
never break push handling: spawn errors, timeouts, non-zero exits and
unparseable output all collapse to "no risk data" for that push.
"""

from __future__ import annotations

import logging
import subprocess

from pydantic import ValidationError

from pushrisk.config import EngineConfig, load_engine_config
from pushrisk.exceptions import EngineError
from pushrisk.models import ScoreRequest, ScoreResponse

logger = logging.getLogger("pushrisk.client")

FALLBACK_RESPONSE = ScoreResponse(impact_score=0)


def run_engine(request: ScoreRequest, config: EngineConfig) -> ScoreResponse:
    """Spawn the engine once for ``request``.

    Raises ``EngineError`` describing why no valid response was produced.
    """
    payload = request.model_dump_json(exclude_none=True).encode("utf-8")

    try:
        result = subprocess.run(
            config.command,
            input=payload,
            capture_output=True,
            timeout=config.timeout_seconds,
        )
    except subprocess.TimeoutExpired:
        raise EngineError("timeout", f"no response within {config.timeout_ms}ms")
    except OSError as e:
        raise EngineError("spawn_failed", str(e))

    stderr = result.stderr.decode("utf-8", errors="replace").strip()
    if result.returncode != 0:
        raise EngineError(f"exit_{result.returncode}", stderr)

    try:
        return ScoreResponse.model_validate_json(result.stdout)
    except ValidationError as e:
        raise EngineError("bad_output", f"{e.error_count()} validation error(s)")


def score_push_subprocess(
    request: ScoreRequest,
    config: EngineConfig | None = None,
) -> ScoreResponse | None:
    """Score a push out of process. Returns None when no risk data is available."""
    config = config or load_engine_config()
    try:
        return run_engine(request, config)
    except EngineError as e:
        logger.warning("risk engine unavailable (%s), continuing without risk data", e)
        return None
