"""Near-duplicate functions within a file.

Pairs are scored by word overlap of their whitespace-normalized bodies.
Exact copies (similarity 1.0) are left to the duplicate block detector.
"""

from collections.abc import Sequence

from ..config import DEFAULT_THRESHOLDS, DeepThresholds
from ..scanning.tokenizer import count_tokens
from .duplicates import normalize_line
from .functions import extract_functions
from .models import NearDuplicate


def string_similarity(a: str, b: str) -> float:
    """Share of words in ``a`` that also occur in ``b``, over the longer list.

    Membership is a plain list test, so a word repeated in ``a`` counts
    every time it appears.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    words_a = a.split()
    words_b = b.split()
    matching = sum(1 for w in words_a if w in words_b)
    total = max(len(words_a), len(words_b))
    return matching / total if total else 0.0


def find_near_duplicates(
    contents: Sequence[str],
    thresholds: DeepThresholds = DEFAULT_THRESHOLDS,
) -> list[NearDuplicate]:
    """Compare every pair of functions inside each file.

    Returns:
        Near-duplicates ordered by estimated savings, largest first
    """
    results: list[NearDuplicate] = []

    for file_idx, content in enumerate(contents):
        fns = extract_functions(content)
        normalized = [normalize_line(fn.body) for fn in fns]

        for i in range(len(fns)):
            for j in range(i + 1, len(fns)):
                norm_a, norm_b = normalized[i], normalized[j]
                if (
                    len(norm_a) < thresholds.min_function_chars
                    or len(norm_b) < thresholds.min_function_chars
                ):
                    continue

                similarity = string_similarity(norm_a, norm_b)
                if not thresholds.similarity_threshold < similarity < 1.0:
                    continue

                smaller = min(count_tokens(fns[i].body), count_tokens(fns[j].body))
                savings = smaller * thresholds.near_dup_recovery_pct // 100
                if savings < thresholds.min_near_dup_savings:
                    continue

                results.append(
                    NearDuplicate(
                        file_idx=file_idx,
                        fn_a=(fns[i].name, fns[i].line),
                        fn_b=(fns[j].name, fns[j].line),
                        savings=savings,
                        similarity=similarity,
                    )
                )

    results.sort(key=lambda nd: nd.savings, reverse=True)
    return results
