"""
token-audit - token-cost auditing for Rust source trees

Counts the o200k_base BPE tokens an LLM would spend reading a crate, grades
tokens-per-line efficiency, and points at duplicated code worth extracting.
"""

__version__ = "0.4.0"

from .deep import DeepResult, run as deep_run
from .gate import GateResult, evaluate_gate
from .grading import Grade, grade, pct, rank, ratio
from .scanning import FileStats, ProjectStats, count_tokens, scan_project

__all__ = [
    "scan_project",  # Main entry point
    "count_tokens",
    "deep_run",
    "evaluate_gate",
    "grade",
    "rank",
    "ratio",
    "pct",
    "FileStats",
    "ProjectStats",
    "DeepResult",
    "GateResult",
    "Grade",
]
