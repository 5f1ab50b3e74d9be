"""Data models for scoring requests and responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_HOTSPOTS = 10
MIN_SCORE = 0
MAX_SCORE = 100


class RiskFlag(str, Enum):
    """Security- or operations-sensitive areas a push can touch.

    Declaration order is the evaluation and output order.
    """

    DEPS = "deps"
    MIGRATION = "migration"
    AUTH = "auth"
    CONFIG = "config"
    SECRETS = "secrets"
    PAYMENT = "payment"


class ChangeType(str, Enum):
    """The nature of a change, independent of risk."""

    FEATURE = "feature"
    FIX = "fix"
    DOCS = "docs"
    TESTS = "tests"
    REFACTOR = "refactor"
    CHORE = "chore"
    PERFORMANCE = "performance"


class ScoreRequest(BaseModel):
    """One push to score."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    commit_message: str
    files_changed: list[str]
    additions: int = Field(ge=0)
    deletions: int = Field(ge=0)
    diff_text: str | None = None  # reserved, no rule reads it

    @property
    def churn(self) -> int:
        return self.additions + self.deletions


class ScoreResponse(BaseModel):
    """Scoring result for one push.

    Construction checks the output invariants, so an instance that exists is
    always safe to hand to a caller.
    """

    model_config = ConfigDict(frozen=True)

    impact_score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    risk_flags: list[RiskFlag] = Field(default_factory=list)
    change_type_tags: list[ChangeType] = Field(default_factory=list)
    hotspot_files: list[str] = Field(default_factory=list, max_length=MAX_HOTSPOTS)
    explanations: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique(self) -> ScoreResponse:
        for name in ("risk_flags", "change_type_tags", "hotspot_files"):
            values = getattr(self, name)
            if len(set(values)) != len(values):
                raise ValueError(f"{name} contains duplicates")
        return self

    def to_json(self) -> str:
        return self.model_dump_json()


class ErrorResponse(BaseModel):
    """Minimal error document written when scoring fails."""

    error: str  # "invalid_input" or "internal_error"
    message: str = ""


def severity_for_score(score: int) -> str:
    """Map an impact score onto the incident severity used for alerting."""
    if score >= 60:
        return "critical"
    if score >= 30:
        return "error"
    return "warning"
