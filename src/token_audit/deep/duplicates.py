"""Cross-file duplicate block detection.

Every run of ``window_size`` consecutive non-blank, whitespace-normalized
lines is fingerprinted with a 64-bit hash. Buckets whose windows occur in
at least two files become clusters once their texts are confirmed equal,
which rules out hash collisions.

Overlapping windows of one long duplicated block produce one cluster per
window, so clusters are finally sorted by (occurrences desc, savings desc)
and any cluster whose occurrences all start inside an occurrence of an
already kept cluster is dropped.
"""

import hashlib
from collections.abc import Sequence

from ..config import DEFAULT_THRESHOLDS, DeepThresholds
from ..scanning.lines import split_lines
from ..scanning.tokenizer import count_tokens
from .models import DuplicateCluster, Fingerprint, Occurrence


def normalize_line(line: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return " ".join(line.split())


def normalize_lines(content: str) -> list[str]:
    return [normalize_line(line) for line in split_lines(content)]


def hash_window(text: str) -> int:
    """Stable 64-bit fingerprint of a window."""
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def window_text(lines: Sequence[str], start: int, size: int) -> str:
    """The first ``size`` non-blank normalized lines from ``start``, joined."""
    taken: list[str] = []
    for line in lines[start:]:
        if line:
            taken.append(line)
            if len(taken) == size:
                break
    return "\n".join(taken)


def window_end(lines: Sequence[str], start: int, size: int) -> int:
    """Index of the line holding the ``size``-th non-blank line from ``start``.

    Falls back to the last line when the file runs out first.
    """
    collected = 0
    end = start
    for i in range(start, len(lines)):
        if lines[i].strip():
            collected += 1
        end = i
        if collected >= size:
            break
    return end


def original_window(content: str, start: int, size: int) -> str:
    """Original source lines covering the window that begins at ``start``."""
    lines = split_lines(content)
    if not lines:
        return ""
    end = window_end(lines, start, size)
    return "\n".join(lines[start : min(end, len(lines) - 1) + 1])


def find_duplicate_blocks(
    normalized: Sequence[Sequence[str]],
    contents: Sequence[str],
    thresholds: DeepThresholds = DEFAULT_THRESHOLDS,
) -> list[DuplicateCluster]:
    """Find windows duplicated across files.

    Args:
        normalized: Normalized lines per file, indexed like ``contents``
        contents: Original file texts
        thresholds: Window size, trivial-window cutoff and recovery share

    Returns:
        Clusters after subsumption, largest patterns first
    """
    size = thresholds.window_size
    buckets: dict[int, list[Fingerprint]] = {}

    for file_idx, lines in enumerate(normalized):
        non_blank = [(i, line) for i, line in enumerate(lines) if line]
        if len(non_blank) < size:
            continue

        for w in range(len(non_blank) - size + 1):
            window = non_blank[w : w + size]
            combined = "\n".join(line for _, line in window)
            # Lone braces, short `use` lines and the like
            if len(combined) < thresholds.min_window_chars:
                continue
            buckets.setdefault(hash_window(combined), []).append(
                Fingerprint(file_idx, window[0][0])
            )

    clusters: list[DuplicateCluster] = []
    for fingerprints in buckets.values():
        if len({fp.file_idx for fp in fingerprints}) < 2:
            continue

        first = fingerprints[0]
        first_text = window_text(normalized[first.file_idx], first.start_line, size)
        if not all(
            window_text(normalized[fp.file_idx], fp.start_line, size) == first_text
            for fp in fingerprints
        ):
            continue

        preview = original_window(contents[first.file_idx], first.start_line, size)
        occurrences = tuple(
            Occurrence(
                fp.file_idx,
                fp.start_line,
                window_end(normalized[fp.file_idx], fp.start_line, size),
            )
            for fp in fingerprints
        )
        clusters.append(
            DuplicateCluster(
                occurrences=occurrences,
                preview=preview,
                tokens_per_instance=count_tokens(preview),
                recovery_pct=thresholds.cluster_recovery_pct,
            )
        )

    return subsume_clusters(clusters)


def subsume_clusters(clusters: Sequence[DuplicateCluster]) -> list[DuplicateCluster]:
    """Sort clusters and drop those dominated by a kept cluster.

    A cluster is dominated when every one of its occurrences starts within
    the ``[start, end]`` range of some occurrence (same file) of a cluster
    already kept. Only the start is checked, so partially overlapping
    clusters both survive.
    """
    ordered = sorted(
        clusters,
        key=lambda c: (len(c.occurrences), c.savings),
        reverse=True,
    )

    kept: list[DuplicateCluster] = []
    for cluster in ordered:
        dominated = any(
            all(
                any(
                    occ.file_idx == other.file_idx and other.start <= occ.start <= other.end
                    for other in existing.occurrences
                )
                for occ in cluster.occurrences
            )
            for existing in kept
        )
        if not dominated:
            kept.append(cluster)
    return kept
