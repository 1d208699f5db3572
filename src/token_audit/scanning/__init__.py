"""Scanning layer: tokenizer, line classifier and project scanner."""

from .lines import classify_lines, split_lines
from .models import FileStats, LineCounts, ProjectStats
from .scanner import ProjectScanner, scan_project
from .tokenizer import ENCODING_NAME, count_tokens

__all__ = [
    "ENCODING_NAME",
    "FileStats",
    "LineCounts",
    "ProjectScanner",
    "ProjectStats",
    "classify_lines",
    "count_tokens",
    "scan_project",
    "split_lines",
]
