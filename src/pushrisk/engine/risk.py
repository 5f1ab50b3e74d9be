"""Risk-flag classifier.

Maps changed file paths to the sensitive areas they touch. Matching is
case-insensitive and substring-based over the whole path, so directory
segments count (``src/auth/handlers.py`` is an auth change). Each category is
evaluated independently; one path may raise several flags.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pushrisk.models import RiskFlag

LOCKFILES: frozenset[str] = frozenset({
    "package-lock.json",
    "npm-shrinkwrap.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "pipfile.lock",
    "poetry.lock",
    "uv.lock",
    "cargo.lock",
    "gemfile.lock",
    "composer.lock",
    "go.mod",
    "go.sum",
})

_SUBSTRINGS: dict[RiskFlag, tuple[str, ...]] = {
    RiskFlag.MIGRATION: ("migration", "schema", "prisma"),
    RiskFlag.AUTH: ("auth", "jwt", "oauth", "session", "acl", "permission"),
    RiskFlag.CONFIG: ("config", "secret", "key", "credential"),
    RiskFlag.SECRETS: ("secret", "password", "api_key", "apikey"),
    RiskFlag.PAYMENT: ("payment", "stripe", "billing", "invoice"),
}


@dataclass
class RiskAssessment:
    """Flags raised for a push, with the paths that raised each one."""

    flags: list[RiskFlag] = field(default_factory=list)
    triggers: dict[RiskFlag, list[str]] = field(default_factory=dict)

    def example_file(self, flag: RiskFlag) -> str:
        files = self.triggers.get(flag, [])
        return files[0] if files else ""


def _basename(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def matches_flag(flag: RiskFlag, path: str) -> bool:
    """Whether ``path`` triggers ``flag``."""
    p = path.lower().replace("\\", "/")
    name = _basename(p)

    if flag is RiskFlag.DEPS:
        return name in LOCKFILES
    if flag is RiskFlag.CONFIG and (p.startswith(".env") or name.startswith(".env")):
        return True
    return any(s in p for s in _SUBSTRINGS[flag])


def classify_risk(files: list[str]) -> RiskAssessment:
    """Derive risk flags from changed paths.

    Output order follows ``RiskFlag`` declaration order, never file order, so
    reordering ``files`` cannot change the flag list.
    """
    assessment = RiskAssessment()

    for flag in RiskFlag:
        hits: list[str] = []
        seen: set[str] = set()
        for path in files:
            if path in seen:
                continue
            seen.add(path)
            if matches_flag(flag, path):
                hits.append(path)
        if hits:
            assessment.flags.append(flag)
            assessment.triggers[flag] = hits

    return assessment
