"""BPE token counting.

The o200k_base vocabulary is loaded once per process on first use and
reused for every later call.
"""

from functools import lru_cache

import tiktoken

from ..exceptions import VocabularyError

ENCODING_NAME = "o200k_base"


@lru_cache(maxsize=None)
def get_encoding() -> "tiktoken.Encoding":
    """Load the shared encoding. Raises VocabularyError if it is unavailable."""
    try:
        return tiktoken.get_encoding(ENCODING_NAME)
    except Exception as e:
        raise VocabularyError(ENCODING_NAME, str(e)) from e


def count_tokens(text: str) -> int:
    """Number of o200k_base tokens in ``text``.

    Special-token markers such as ``<|endoftext|>`` are allowed and count
    as one token each, so source text never raises.
    """
    if not text:
        return 0
    return len(get_encoding().encode(text, allowed_special="all"))
