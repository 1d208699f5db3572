"""Data models for deep (duplication) analysis.

Line numbers are 0-based indices into a file's lines; add 1 for display.
"""

from dataclasses import dataclass
from typing import NamedTuple


class Fingerprint(NamedTuple):
    """Where a window starts: file index and line index."""

    file_idx: int
    start_line: int


class Occurrence(NamedTuple):
    """One instance of a duplicated window; ``end`` is inclusive."""

    file_idx: int
    start: int
    end: int


@dataclass(frozen=True)
class DuplicateCluster:
    """A window that appears verbatim (after normalization) in 2+ files.

    ``preview`` is copied from the original, non-normalized lines of the
    first occurrence.
    """

    occurrences: tuple[Occurrence, ...]
    preview: str
    tokens_per_instance: int
    recovery_pct: int = 80

    @property
    def savings(self) -> int:
        """Tokens recovered by extracting the block into one place."""
        instances = len(self.occurrences)
        if instances <= 1:
            return 0
        return self.tokens_per_instance * (instances - 1) * self.recovery_pct // 100

    @property
    def span(self) -> int:
        """Line span of the first occurrence."""
        first = self.occurrences[0]
        return first.end - first.start + 1

    @property
    def file_count(self) -> int:
        return len({occ.file_idx for occ in self.occurrences})


@dataclass(frozen=True)
class FnInfo:
    """A function located by the brace-balancing extractor."""

    name: str
    line: int
    body: str


@dataclass(frozen=True)
class NearDuplicate:
    """Two functions in one file whose bodies are similar but not equal."""

    file_idx: int
    fn_a: tuple[str, int]
    fn_b: tuple[str, int]
    savings: int
    similarity: float = 0.0


@dataclass(frozen=True)
class DeepResult:
    """Refactoring signals derived from a ProjectStats."""

    clusters: tuple[DuplicateCluster, ...] = ()
    near_duplicates: tuple[NearDuplicate, ...] = ()
    total_savings: int = 0

    @property
    def pattern_count(self) -> int:
        return len(self.clusters) + len(self.near_duplicates)

    @property
    def is_empty(self) -> bool:
        return not self.clusters and not self.near_duplicates
