"""Deep analysis: cross-file duplicate blocks and near-duplicate functions."""

from .analyzer import run
from .duplicates import find_duplicate_blocks, normalize_line, subsume_clusters
from .functions import extract_functions
from .models import (
    DeepResult,
    DuplicateCluster,
    Fingerprint,
    FnInfo,
    NearDuplicate,
    Occurrence,
)
from .near_duplicates import find_near_duplicates, string_similarity

__all__ = [
    "DeepResult",
    "DuplicateCluster",
    "Fingerprint",
    "FnInfo",
    "NearDuplicate",
    "Occurrence",
    "extract_functions",
    "find_duplicate_blocks",
    "find_near_duplicates",
    "normalize_line",
    "run",
    "string_similarity",
    "subsume_clusters",
]
