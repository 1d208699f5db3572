"""Tests for the CI gate."""

from token_audit.gate import evaluate_gate
from token_audit.scanning import FileStats, ProjectStats


def _stats(tokens: int, lines: int) -> ProjectStats:
    f = FileStats(path="src/lib.rs", content="", lines=lines, tokens=tokens, ratio=tokens / lines)
    return ProjectStats.from_files([f])


class TestEvaluateGate:
    def test_no_limits_passes(self):
        result = evaluate_gate(_stats(800, 100))
        assert result.passed
        assert result.failures == ()

    def test_ratio_too_high(self):
        result = evaluate_gate(_stats(800, 100), max_tl=6.0)
        assert not result.passed
        assert result.failures == ("T/L ratio too high: 8.0 > 6.0 (max)",)

    def test_ratio_at_limit_passes(self):
        assert evaluate_gate(_stats(600, 100), max_tl=6.0).passed

    def test_token_budget(self):
        result = evaluate_gate(_stats(800, 100), max_tokens=500)
        assert result.failures == ("token budget exceeded: 800 > 500 (max)",)
        assert evaluate_gate(_stats(800, 100), max_tokens=800).passed

    def test_min_grade(self):
        result = evaluate_gate(_stats(800, 100), min_grade="A")
        assert result.grade == "B"
        assert result.failures == ("grade too low: B < A (minimum)",)
        assert evaluate_gate(_stats(800, 100), min_grade="B").passed

    def test_multiple_failures(self):
        result = evaluate_gate(_stats(1300, 100), max_tokens=1000, max_tl=6.0, min_grade="B")
        assert len(result.failures) == 3
        assert result.grade == "D"

    def test_to_dict_shape(self):
        result = evaluate_gate(_stats(800, 100), max_tl=6.0)
        data = result.to_dict()
        assert set(data) == {
            "files",
            "total_tokens",
            "total_lines",
            "ratio",
            "grade",
            "pass",
            "failures",
        }
        assert data["pass"] is False
        assert data["ratio"] == 8.0
        assert data["files"] == 1
        assert any("T/L ratio too high" in f for f in data["failures"])

    def test_empty_project(self):
        result = evaluate_gate(ProjectStats(), min_grade="A+")
        assert result.passed
        assert result.grade == "A+"
        assert result.ratio == 0.0
