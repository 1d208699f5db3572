"""CI gate: budget checks over project stats."""

from dataclasses import dataclass, field
from typing import Optional

from .grading import grade, rank
from .scanning.models import ProjectStats


@dataclass(frozen=True)
class GateResult:
    """Outcome of a CI gate run."""

    files: int
    total_tokens: int
    total_lines: int
    ratio: float
    grade: str
    failures: tuple[str, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "files": self.files,
            "total_tokens": self.total_tokens,
            "total_lines": self.total_lines,
            "ratio": round(self.ratio, 2),
            "grade": self.grade,
            "pass": self.passed,
            "failures": list(self.failures),
        }


def evaluate_gate(
    stats: ProjectStats,
    max_tokens: Optional[int] = None,
    max_tl: Optional[float] = None,
    min_grade: Optional[str] = None,
) -> GateResult:
    """Check project totals against the given limits.

    Each limit left as None is not checked.
    """
    avg_ratio = stats.ratio
    letter = grade(avg_ratio).letter
    failures: list[str] = []

    if max_tokens is not None and stats.total_tokens > max_tokens:
        failures.append(f"token budget exceeded: {stats.total_tokens} > {max_tokens} (max)")

    if max_tl is not None and avg_ratio > max_tl:
        failures.append(f"T/L ratio too high: {avg_ratio:.1f} > {max_tl:.1f} (max)")

    if min_grade is not None and rank(letter) < rank(min_grade):
        failures.append(f"grade too low: {letter} < {min_grade} (minimum)")

    return GateResult(
        files=len(stats.files),
        total_tokens=stats.total_tokens,
        total_lines=stats.total_lines,
        ratio=avg_ratio,
        grade=letter,
        failures=tuple(failures),
    )
