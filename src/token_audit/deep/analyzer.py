"""Deep analysis: duplicated blocks plus near-duplicate functions."""

from ..config import DEFAULT_THRESHOLDS, DeepThresholds
from ..logging_config import get_logger
from ..scanning.models import ProjectStats
from .duplicates import find_duplicate_blocks, normalize_lines
from .models import DeepResult
from .near_duplicates import find_near_duplicates

logger = get_logger(__name__)


def run(stats: ProjectStats, thresholds: DeepThresholds = DEFAULT_THRESHOLDS) -> DeepResult:
    """Derive refactoring signals from scanned project stats.

    Pure with respect to ``stats``: the same input always yields the same
    result, and an empty project yields an empty result.
    """
    contents = [f.content or "" for f in stats.files]
    normalized = [normalize_lines(c) for c in contents]

    clusters = find_duplicate_blocks(normalized, contents, thresholds)
    near_dupes = find_near_duplicates(contents, thresholds)

    total_savings = sum(c.savings for c in clusters) + sum(n.savings for n in near_dupes)
    logger.debug(
        "Deep analysis: %d clusters, %d near-duplicates, ~%d tokens",
        len(clusters),
        len(near_dupes),
        total_savings,
    )
    return DeepResult(
        clusters=tuple(clusters),
        near_duplicates=tuple(near_dupes),
        total_savings=total_savings,
    )
