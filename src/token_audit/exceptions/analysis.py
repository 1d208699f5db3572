"""Analysis-related exceptions: file access, tokenizer, git revisions."""

from pathlib import Path

from .base import TokenAuditError


class AnalysisError(TokenAuditError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot read file: {filepath}",
            details={"reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class VocabularyError(AnalysisError):
    """Raised when the BPE vocabulary cannot be loaded."""

    def __init__(self, encoding: str, reason: str):
        super().__init__(
            f"Cannot load tokenizer vocabulary: {encoding}",
            details={"reason": reason},
        )
        self.encoding = encoding
        self.reason = reason


class RevisionError(AnalysisError):
    """Raised when a git revision cannot be inspected."""

    def __init__(self, revision: str, reason: str):
        super().__init__(
            f"Cannot read revision: {revision}",
            details={"reason": reason},
        )
        self.revision = revision
        self.reason = reason
