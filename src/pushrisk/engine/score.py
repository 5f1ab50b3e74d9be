"""Impact scoring, hotspot ranking, and explanations.

The impact score is the sum of three bounded parts:

  1. Churn (0-60): a saturating log curve over additions + deletions, so a
     10-line and a 10,000-line push stay distinguishable without either
     end collapsing to 0 or running away.
  2. Risk (0-35): fixed per-flag weights summed in flag order, then capped.
  3. Change-type modifier (-5..+5): tests/docs-only pushes lose points,
     risky combinations (a migration shipped with new code) gain some.

The total is clamped to [0, 100] and rounded half-up. Every step is a pure
function of its inputs; nothing depends on dict or set iteration order.
"""

from __future__ import annotations

import math

from pushrisk.engine.risk import RiskAssessment
from pushrisk.models import MAX_HOTSPOTS, MAX_SCORE, MIN_SCORE, ChangeType, RiskFlag

CHURN_CEILING = 60.0
CHURN_SATURATION = 10_000
RISK_CEILING = 35
MODIFIER_BOUND = 5
LARGE_CHURN_LINES = 500

RISK_WEIGHTS: dict[RiskFlag, int] = {
    RiskFlag.DEPS: 6,
    RiskFlag.MIGRATION: 8,
    RiskFlag.AUTH: 12,
    RiskFlag.CONFIG: 6,
    RiskFlag.SECRETS: 14,
    RiskFlag.PAYMENT: 12,
}

# Highest first. Used to order flagged hotspot files.
SEVERITY_ORDER: tuple[RiskFlag, ...] = (
    RiskFlag.SECRETS,
    RiskFlag.AUTH,
    RiskFlag.PAYMENT,
    RiskFlag.MIGRATION,
    RiskFlag.CONFIG,
    RiskFlag.DEPS,
)

_SENSITIVE = frozenset({RiskFlag.AUTH, RiskFlag.PAYMENT, RiskFlag.SECRETS})

_FLAG_SENTENCES: dict[RiskFlag, str] = {
    RiskFlag.DEPS: "Dependency lockfiles or manifests changed (e.g. {file}).",
    RiskFlag.MIGRATION: "Schema or migration changes detected (e.g. {file}).",
    RiskFlag.AUTH: "Auth or permission-related files changed (e.g. {file}).",
    RiskFlag.CONFIG: "Config or environment files changed (e.g. {file}).",
    RiskFlag.SECRETS: "Possible secrets or credentials area touched (e.g. {file}).",
    RiskFlag.PAYMENT: "Payment or billing code changed (e.g. {file}).",
}

_TAG_SENTENCES: dict[ChangeType, str] = {
    ChangeType.FEATURE: "Adds or extends functionality.",
    ChangeType.FIX: "Fixes existing behavior.",
    ChangeType.DOCS: "Documentation changed.",
    ChangeType.TESTS: "Test files changed.",
    ChangeType.REFACTOR: "Restructures code without intended behavior change.",
    ChangeType.CHORE: "Maintenance or housekeeping change.",
    ChangeType.PERFORMANCE: "Performance-related change.",
}


def churn_subscore(additions: int, deletions: int) -> float:
    """Map line churn onto [0, 60] with diminishing returns."""
    churn = additions + deletions
    if churn <= 0:
        return 0.0
    value = CHURN_CEILING * math.log1p(churn) / math.log1p(CHURN_SATURATION)
    return min(CHURN_CEILING, value)


def risk_subscore(flags: list[RiskFlag]) -> int:
    total = 0
    for flag in RiskFlag:
        if flag in flags:
            total += RISK_WEIGHTS[flag]
    return min(RISK_CEILING, total)


def type_modifier(tags: list[ChangeType], flags: list[RiskFlag]) -> int:
    """Small adjustment for the kind of change, within [-5, 5]."""
    tag_set = set(tags)
    flag_set = set(flags)
    modifier = 0

    if tag_set == {ChangeType.TESTS}:
        modifier -= 5
    elif tag_set == {ChangeType.DOCS} or tag_set == {ChangeType.DOCS, ChangeType.TESTS}:
        modifier -= 4

    # Feature and fix score alike so the churn-driven fallback tag cannot
    # lower the score.
    if RiskFlag.MIGRATION in flag_set:
        if tag_set & {ChangeType.FEATURE, ChangeType.FIX}:
            modifier += 5
        elif ChangeType.REFACTOR in tag_set:
            modifier += 3

    if ChangeType.PERFORMANCE in tag_set and flag_set & _SENSITIVE:
        modifier += 2

    return max(-MODIFIER_BOUND, min(MODIFIER_BOUND, modifier))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_impact_score(
    additions: int,
    deletions: int,
    flags: list[RiskFlag],
    tags: list[ChangeType],
) -> int:
    base = churn_subscore(additions, deletions) + risk_subscore(flags)
    # Keep the modifier from pushing the score out of range on its own.
    modifier = max(-base, min(MAX_SCORE - base, type_modifier(tags, flags)))
    total = base + modifier
    return max(MIN_SCORE, min(MAX_SCORE, _round_half_up(total)))


def compute_hotspot_files(
    files: list[str],
    assessment: RiskAssessment,
    limit: int = MAX_HOTSPOTS,
) -> list[str]:
    """Rank distinct files for review: flagged files by severity, then the rest.

    Ties keep first-seen input order.
    """
    severity: dict[str, int] = {}
    for rank, flag in enumerate(SEVERITY_ORDER):
        for path in assessment.triggers.get(flag, []):
            severity.setdefault(path, rank)

    distinct = list(dict.fromkeys(files))
    unflagged = len(SEVERITY_ORDER)
    ranked = sorted(
        enumerate(distinct),
        key=lambda item: (severity.get(item[1], unflagged), item[0]),
    )
    return [path for _, path in ranked[:limit]]


def compute_explanations(
    additions: int,
    deletions: int,
    assessment: RiskAssessment,
    tags: list[ChangeType],
) -> list[str]:
    out: list[str] = []

    for flag in assessment.flags:
        out.append(_FLAG_SENTENCES[flag].format(file=assessment.example_file(flag)))

    for tag in tags:
        out.append(_TAG_SENTENCES[tag])

    churn = additions + deletions
    if churn >= LARGE_CHURN_LINES:
        out.append(
            f"Large change: {churn} lines touched "
            f"(+{additions}/-{deletions})."
        )

    return out
