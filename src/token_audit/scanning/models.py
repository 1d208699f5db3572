"""Data models for the scanning layer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineCounts:
    """Code/comment/blank split of a file's lines."""

    code: int = 0
    comment: int = 0
    blank: int = 0

    @property
    def total(self) -> int:
        return self.code + self.comment + self.blank


@dataclass(frozen=True)
class FileStats:
    """Token accounting for a single source file.

    ``path`` is relative to the scan root with forward slashes. ``content``
    is the full decoded text.
    """

    path: str
    content: str
    lines: int
    tokens: int
    ratio: float
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0


@dataclass(frozen=True)
class ProjectStats:
    """Per-file stats in walker order plus additive totals."""

    files: tuple[FileStats, ...] = ()
    total_lines: int = 0
    total_tokens: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0

    @property
    def ratio(self) -> float:
        """Project-wide tokens per line."""
        if self.total_lines == 0:
            return 0.0
        return self.total_tokens / self.total_lines

    @classmethod
    def from_files(cls, files) -> "ProjectStats":
        files = tuple(files)
        return cls(
            files=files,
            total_lines=sum(f.lines for f in files),
            total_tokens=sum(f.tokens for f in files),
            code_lines=sum(f.code_lines for f in files),
            comment_lines=sum(f.comment_lines for f in files),
            blank_lines=sum(f.blank_lines for f in files),
        )

    def sorted_by_tokens(self) -> list[FileStats]:
        """Files ordered by token count, heaviest first."""
        return sorted(self.files, key=lambda f: f.tokens, reverse=True)
