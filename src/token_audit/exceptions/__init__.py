"""Exception hierarchy for token-audit."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    RevisionError,
    VocabularyError,
)
from .base import TokenAuditError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "TokenAuditError",
    "AnalysisError",
    "FileAccessError",
    "VocabularyError",
    "RevisionError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
