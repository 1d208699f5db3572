"""Tests for the token-audit command line."""

import json
import os

import pytest
from typer.testing import CliRunner

from conftest import DUPLICATED_BLOCK
from token_audit import __version__
from token_audit.cli import app
from token_audit.config import MODEL_ENV_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """No user config or TOKEN_AUDIT_* variables leak into the commands."""
    home = tmp_path / "_home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("TOKEN_AUDIT_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv(MODEL_ENV_VAR, raising=False)


def invoke(root, *args):
    return runner.invoke(app, ["-C", str(root), *args])


class TestGlobalOptions:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_subcommand_prints_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "audit" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["-C", str(tmp_path / "nope"), "audit"])
        assert result.exit_code == 2

    def test_missing_configured_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOKEN_AUDIT_SOURCE_ROOT", str(tmp_path / "gone"))
        result = runner.invoke(app, ["audit"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Invalid path" in result.output


class TestAudit:
    def test_audit_table(self, sample_project):
        result = invoke(sample_project, "audit")
        assert result.exit_code == 0
        assert "src/main.rs" in result.output
        assert "src/lib.rs" in result.output
        assert "generated" not in result.output
        assert "Code: 8 | Comments: 3 | Blanks: 1" in result.output
        assert "Token efficiency:" in result.output

    def test_empty_project(self, tmp_path):
        result = invoke(tmp_path, "audit")
        assert result.exit_code == 0
        assert "Code: 0 | Comments: 0 | Blanks: 0" in result.output

    def test_top(self, sample_project):
        result = invoke(sample_project, "top", "1")
        assert result.exit_code == 0
        assert "Top 1 = " in result.output

    def test_top_rejects_zero(self, sample_project):
        assert invoke(sample_project, "top", "0").exit_code == 2

    def test_top_uses_configured_default(self, sample_project, monkeypatch):
        monkeypatch.setenv("TOKEN_AUDIT_TOP_N", "1")
        result = invoke(sample_project, "top")
        assert "Top 1 = " in result.output


class TestBadge:
    def test_badge_formats(self, sample_project):
        result = invoke(sample_project, "badge")
        assert result.exit_code == 0
        assert "https://img.shields.io/badge/token_efficiency-" in result.output
        for heading in ("Markdown:", "HTML:", "reStructuredText:"):
            assert heading in result.output


class TestCi:
    def test_passes_without_limits(self, sample_project):
        result = invoke(sample_project, "ci")
        assert result.exit_code == 0
        assert "PASS" in result.output

    def test_json_failure(self, sample_project):
        result = invoke(sample_project, "ci", "--max-tl", "0.5", "--json")
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["pass"] is False
        assert report["files"] == 2
        assert report["failures"][0].startswith("T/L ratio too high")

    def test_human_failure(self, sample_project):
        result = invoke(sample_project, "ci", "--max-tokens", "1")
        assert result.exit_code == 1
        assert "FAIL:" in result.output
        assert "token budget exceeded" in result.output

    def test_invalid_grade(self, sample_project):
        assert invoke(sample_project, "ci", "--min-grade", "E").exit_code == 2

    def test_limits_from_config(self, sample_project, monkeypatch):
        monkeypatch.setenv("TOKEN_AUDIT_CI_MAX_TOKENS", "1")
        assert invoke(sample_project, "ci").exit_code == 1


class TestDeep:
    def test_reports_duplicates(self, project_factory):
        root = project_factory({"src/a.rs": DUPLICATED_BLOCK, "src/b.rs": DUPLICATED_BLOCK})
        result = invoke(root, "deep")
        assert result.exit_code == 0
        assert "Cross-file duplicates" in result.output
        assert "src/a.rs:1" in result.output
        assert "Deep analysis: 1 pattern(s)" in result.output

    def test_nothing_found(self, sample_project):
        result = invoke(sample_project, "deep")
        assert result.exit_code == 0
        assert "No duplication found." in result.output


class TestModel:
    def test_default(self, tmp_path):
        result = invoke(tmp_path, "model")
        assert result.output.strip() == "deepseek/deepseek-chat"

    def test_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODEL_ENV_VAR, "openai/gpt-4o")
        assert invoke(tmp_path, "model").output.strip() == "openai/gpt-4o"

    def test_flag(self, tmp_path):
        result = invoke(tmp_path, "model", "--model", "local/llama")
        assert result.output.strip() == "local/llama"


@pytest.mark.git
class TestRevisions:
    def test_compare_same_tree(self, git_repo):
        result = invoke(git_repo, "compare", "main")
        assert result.exit_code == 0
        assert "Comparing token efficiency: main vs main" in result.output
        assert "similar token efficiency" in result.output

    def test_compare_with_older_commit(self, git_repo):
        result = invoke(git_repo, "compare", "HEAD~1")
        assert result.exit_code == 0
        assert "Token delta: +" in result.output

    def test_compare_unknown_branch(self, git_repo):
        result = invoke(git_repo, "compare", "no-such-branch")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_history(self, git_repo):
        result = invoke(git_repo, "history", "2")
        assert result.exit_code == 0
        assert "Scanning 2 commits" in result.output
        assert "Trend: +" in result.output
