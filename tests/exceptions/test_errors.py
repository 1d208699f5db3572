"""Tests for the token-audit exception hierarchy."""

from pathlib import Path

import pytest

from token_audit.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    RevisionError,
    TokenAuditError,
    VocabularyError,
)


class TestHierarchy:
    """Every error is catchable as TokenAuditError."""

    @pytest.mark.parametrize(
        "error, parent",
        [
            (FileAccessError(Path("a.rs"), "denied"), AnalysisError),
            (VocabularyError("o200k_base", "offline"), AnalysisError),
            (RevisionError("main", "unknown revision"), AnalysisError),
            (InvalidPathError(Path("x"), "missing"), ConfigurationError),
            (InvalidConfigError("top_n", 0, "must be positive"), ConfigurationError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, TokenAuditError)


class TestMessages:
    def test_plain_message(self):
        assert str(TokenAuditError("boom")) == "boom"

    def test_details_appended(self):
        err = FileAccessError(Path("src/a.rs"), "invalid utf-8 at byte 3")
        assert str(err) == "Cannot read file: src/a.rs (reason=invalid utf-8 at byte 3)"
        assert err.filepath == Path("src/a.rs")

    def test_revision_attributes(self):
        err = RevisionError("feature", "unknown revision")
        assert err.revision == "feature"
        assert "unknown revision" in str(err)
