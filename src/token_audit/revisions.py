"""Read source files at a git revision via subprocess."""

import subprocess
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Union

from .exceptions import RevisionError
from .file_ops import BUILD_DIR, SOURCE_EXTENSION
from .grading import ratio
from .logging_config import get_logger
from .scanning.lines import split_lines
from .scanning.tokenizer import count_tokens

logger = get_logger(__name__)


@dataclass(frozen=True)
class RevisionStats:
    """Token totals for the source files at one revision."""

    revision: str
    files: int
    tokens: int
    lines: int

    @property
    def ratio(self) -> float:
        return ratio(self.tokens, self.lines)


@dataclass(frozen=True)
class CommitSummary:
    """Abbreviated hash and subject of a commit."""

    hash: str
    message: str


class GitRevisionReader:
    """List and read source files at arbitrary revisions of a repository."""

    def __init__(
        self,
        repo_path: Union[str, Path] = ".",
        extension: str = SOURCE_EXTENSION,
        build_dir: str = BUILD_DIR,
        timeout: int = 30,
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.extension = extension
        self.build_dir = build_dir
        self.timeout = timeout

    def _git(self, revision: str, *args: str) -> str:
        cmd = ["git", "-C", self.repo_path, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise RevisionError(revision, "git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise RevisionError(revision, f"git {args[0]} timed out after {self.timeout}s") from e

        if result.returncode != 0:
            reason = result.stderr.strip().splitlines()
            raise RevisionError(revision, reason[0] if reason else f"git {args[0]} failed")
        return result.stdout

    def list_source_files(self, revision: str) -> list[str]:
        """Source file paths tracked at ``revision``, outside the build dir."""
        output = self._git(revision, "ls-tree", "-r", "--name-only", revision)
        files = []
        for line in output.splitlines():
            path = PurePosixPath(line)
            if path.suffix == self.extension and self.build_dir not in path.parts[:-1]:
                files.append(line)
        return files

    def show_file(self, revision: str, path: str) -> str:
        """Content of ``path`` at ``revision``."""
        return self._git(revision, "show", f"{revision}:{path}")

    def count_tokens_at(self, revision: str) -> RevisionStats:
        """Token and line totals over every source file at ``revision``."""
        files = self.list_source_files(revision)
        tokens = 0
        lines = 0
        for path in files:
            content = self.show_file(revision, path)
            tokens += count_tokens(content)
            lines += len(split_lines(content))
        logger.debug("Revision %s: %d files, %d tokens", revision, len(files), tokens)
        return RevisionStats(revision=revision, files=len(files), tokens=tokens, lines=lines)

    def current_branch(self) -> str:
        return self._git("HEAD", "rev-parse", "--abbrev-ref", "HEAD").strip()

    def recent_commits(self, n: int) -> list[CommitSummary]:
        """The last ``n`` commits, newest first."""
        output = self._git("HEAD", "log", "--oneline", "-n", str(n))
        commits = []
        for line in output.splitlines():
            sha, sep, message = line.partition(" ")
            if sep:
                commits.append(CommitSummary(hash=sha, message=message))
        return commits
