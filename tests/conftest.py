"""Shared test fixtures for pushrisk."""

from __future__ import annotations

import json

import pytest

from pushrisk.models import ScoreRequest


def _make_request(
    commit_message: str = "",
    files_changed: list[str] | None = None,
    additions: int = 0,
    deletions: int = 0,
) -> ScoreRequest:
    return ScoreRequest(
        commit_message=commit_message,
        files_changed=files_changed or [],
        additions=additions,
        deletions=deletions,
    )


@pytest.fixture
def make_request():
    """Factory for requests with sensible empty defaults."""
    return _make_request


@pytest.fixture
def auth_push() -> ScoreRequest:
    """Feature push touching auth code and a lockfile."""
    return _make_request(
        commit_message="feat: add auth",
        files_changed=["src/auth/jwt.go", "package-lock.json"],
        additions=50,
        deletions=10,
    )


@pytest.fixture
def docs_push() -> ScoreRequest:
    return _make_request(
        commit_message="docs: update README",
        files_changed=["README.md"],
        additions=5,
        deletions=1,
    )


@pytest.fixture
def empty_push() -> ScoreRequest:
    return _make_request()


@pytest.fixture
def large_push() -> ScoreRequest:
    """Big push mixing sensitive and ordinary files, with duplicates."""
    files = [f"src/module_{i}.py" for i in range(15)]
    files += [
        "config/settings.yaml",
        "src/billing/stripe_client.py",
        "db/migrations/0042_add_plan.sql",
        "src/module_3.py",
        "secrets/api_key.txt",
        "src/auth/session.py",
    ]
    return _make_request(
        commit_message="feat(billing): plans",
        files_changed=files,
        additions=1800,
        deletions=400,
    )


@pytest.fixture
def request_json(auth_push: ScoreRequest) -> bytes:
    return json.dumps(auth_push.model_dump(exclude_none=True)).encode("utf-8")
