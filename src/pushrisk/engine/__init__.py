"""Push scoring engine.

Pure computation: no I/O, no clock, no globals that change between calls.
Safe to call in-process from any number of threads.

Usage:
    from pushrisk.engine import score_push
    from pushrisk.models import ScoreRequest

    request = ScoreRequest(
        commit_message="feat: add auth",
        files_changed=["src/auth/jwt.go", "package-lock.json"],
        additions=50,
        deletions=10,
    )
    response = score_push(request)
"""

from __future__ import annotations

from pydantic import ValidationError

from pushrisk.engine.change_type import classify_change_type
from pushrisk.engine.risk import RiskAssessment, classify_risk
from pushrisk.engine.score import (
    compute_explanations,
    compute_hotspot_files,
    compute_impact_score,
)
from pushrisk.exceptions import InvariantError
from pushrisk.models import ScoreRequest, ScoreResponse


def score_push(request: ScoreRequest) -> ScoreResponse:
    """Score one push. Raises ``InvariantError`` if the result is invalid."""
    assessment = classify_risk(request.files_changed)
    tags = classify_change_type(
        request.commit_message,
        request.files_changed,
        request.additions,
        request.deletions,
    )

    try:
        return ScoreResponse(
            impact_score=compute_impact_score(
                request.additions, request.deletions, assessment.flags, tags
            ),
            risk_flags=assessment.flags,
            change_type_tags=tags,
            hotspot_files=compute_hotspot_files(request.files_changed, assessment),
            explanations=compute_explanations(
                request.additions, request.deletions, assessment, tags
            ),
        )
    except ValidationError as e:
        raise InvariantError(f"engine produced an invalid response: {e}") from e


__all__ = ["score_push", "classify_risk", "classify_change_type", "RiskAssessment"]
