"""Project scanner: walks a Rust tree and accounts tokens per file."""

from pathlib import Path
from typing import Optional, Union

from ..config import AuditConfig
from ..exceptions import FileAccessError
from ..file_ops import (
    BUILD_DIR,
    SOURCE_EXTENSION,
    iter_source_files,
    read_source,
    relative_posix,
    validate_root,
)
from ..grading import ratio
from ..logging_config import get_logger
from .lines import classify_lines, split_lines
from .models import FileStats, ProjectStats
from .tokenizer import count_tokens

logger = get_logger(__name__)


class ProjectScanner:
    """Scan every source file below a root directory."""

    def __init__(
        self,
        root_dir: Union[str, Path] = ".",
        extension: str = SOURCE_EXTENSION,
        build_dir: str = BUILD_DIR,
    ):
        self.root_dir = Path(root_dir)
        self.extension = extension
        self.build_dir = build_dir

    def scan(self) -> ProjectStats:
        """Build ProjectStats. Unreadable files are logged and skipped.

        Raises:
            InvalidPathError: If the root is not a readable directory
        """
        validate_root(self.root_dir)
        files: list[FileStats] = []
        skipped = 0

        for filepath in iter_source_files(self.root_dir, self.extension, self.build_dir):
            try:
                content = read_source(filepath)
            except FileAccessError as e:
                logger.warning("Skipping %s: %s", e.filepath, e.reason)
                skipped += 1
                continue
            files.append(self.analyze_text(relative_posix(filepath, self.root_dir), content))

        logger.debug(
            "Scanned %d %s files under %s (%d skipped)",
            len(files),
            self.extension,
            self.root_dir,
            skipped,
        )
        return ProjectStats.from_files(files)

    @staticmethod
    def analyze_text(path: str, content: str) -> FileStats:
        """Token and line accounting for one file's text."""
        lines = len(split_lines(content))
        tokens = count_tokens(content)
        counts = classify_lines(content)
        return FileStats(
            path=path,
            content=content,
            lines=lines,
            tokens=tokens,
            ratio=ratio(tokens, lines),
            code_lines=counts.code,
            comment_lines=counts.comment,
            blank_lines=counts.blank,
        )


def scan_project(
    root_dir: Union[str, Path, None] = None, config: Optional[AuditConfig] = None
) -> ProjectStats:
    """Scan ``root_dir`` (default: the configured source root)."""
    config = config or AuditConfig()
    root = Path(root_dir) if root_dir is not None else Path(config.source_root)
    return ProjectScanner(root, build_dir=config.build_dir).scan()
