"""Tests for the CLI interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pushrisk.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def request_file(tmp_path: Path, request_json: bytes) -> Path:
    path = tmp_path / "push.json"
    path.write_bytes(request_json)
    return path


class TestCLIScore:
    def test_score_stdin(self, runner: CliRunner, request_json: bytes):
        result = runner.invoke(main, ["score"], input=request_json)
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert doc["risk_flags"] == ["deps", "auth"]

    def test_score_malformed(self, runner: CliRunner):
        result = runner.invoke(main, ["score"], input=b"not json")
        assert result.exit_code == 1

    def test_score_empty_push(self, runner: CliRunner):
        raw = b'{"commit_message":"","files_changed":[],"additions":0,"deletions":0}'
        result = runner.invoke(main, ["score"], input=raw)
        assert result.exit_code == 0
        assert json.loads(result.stdout)["impact_score"] == 0


class TestCLIExplain:
    def test_explain_table(self, runner: CliRunner, request_file: Path):
        result = runner.invoke(main, ["explain", str(request_file)])
        assert result.exit_code == 0
        assert "Impact Score" in result.output
        assert "src/auth/jwt.go" in result.output

    def test_explain_markdown(self, runner: CliRunner, request_file: Path):
        result = runner.invoke(main, ["explain", str(request_file), "--format", "markdown"])
        assert result.exit_code == 0
        assert "## Push Impact: feat: add auth" in result.output

    def test_explain_json(self, runner: CliRunner, request_file: Path):
        result = runner.invoke(main, ["explain", str(request_file), "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["change_type_tags"] == ["feature"]

    def test_explain_stdin(self, runner: CliRunner, request_json: bytes):
        result = runner.invoke(main, ["explain", "--format", "json"], input=request_json)
        assert result.exit_code == 0

    def test_explain_bad_input(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{")
        result = runner.invoke(main, ["explain", str(path)])
        assert result.exit_code == 1


class TestCLIInvoke:
    def test_invoke_fallback(self, runner: CliRunner, request_file: Path, monkeypatch):
        monkeypatch.setenv("PUSHRISK_ENGINE_BIN", "/nonexistent/pushrisk-engine")
        result = runner.invoke(main, ["invoke", str(request_file)])
        assert result.exit_code == 0
        assert "fallback" in result.output

    def test_invoke_bad_timeout_env(self, runner: CliRunner, request_file: Path, monkeypatch):
        monkeypatch.setenv("PUSHRISK_TIMEOUT_MS", "soon")
        result = runner.invoke(main, ["invoke", str(request_file)])
        assert result.exit_code == 1

    def test_invoke_rejects_zero_timeout(self, runner: CliRunner, request_file: Path):
        result = runner.invoke(main, ["invoke", str(request_file), "--timeout-ms", "0"])
        assert result.exit_code == 2
        assert "--timeout-ms" in result.output


class TestCLIConfig:
    def test_config_show(self, runner: CliRunner, monkeypatch):
        monkeypatch.setenv("PUSHRISK_TIMEOUT_MS", "1234")
        result = runner.invoke(main, ["config", "show"])
        assert result.exit_code == 0
        assert "1234" in result.output


class TestCLIVersion:
    def test_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
