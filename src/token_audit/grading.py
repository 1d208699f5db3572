"""Efficiency grading and ratio helpers.

Grades map a tokens-per-line ratio to a letter. Bounds are inclusive, so a
ratio of exactly 5.0 is still A+.
"""

from dataclasses import dataclass

# (inclusive upper bound, letter, shields.io colour, URL-safe letter)
GRADE_BANDS = (
    (5.0, "A+", "brightgreen", "A%2B"),
    (7.0, "A", "green", "A"),
    (9.0, "B", "blue", "B"),
    (12.0, "C", "orange", "C"),
)
FALLBACK_GRADE = ("D", "red", "D")

_RANKS = {"A+": 5, "A": 4, "B": 3, "C": 2, "D": 1}

_MESSAGES = {
    "A+": "Excellent - extremely token-efficient",
    "A": "Great - lean and concise code",
    "B": "Good - some room for improvement",
    "C": "Fair - look at `token-audit deep` for duplicated code",
}
_FALLBACK_MESSAGE = "Verbose - run `token-audit deep` and `token-audit top` to find the heaviest code"


@dataclass(frozen=True)
class Grade:
    """Letter grade with its presentation colour and URL encoding."""

    letter: str
    color: str
    url_letter: str

    @property
    def rank(self) -> int:
        return rank(self.letter)

    def __iter__(self):
        return iter((self.letter, self.color, self.url_letter))


def grade(ratio_value: float) -> Grade:
    """Grade a tokens-per-line ratio."""
    for upper, letter, color, url_letter in GRADE_BANDS:
        if ratio_value <= upper:
            return Grade(letter, color, url_letter)
    return Grade(*FALLBACK_GRADE)


def rank(letter: str) -> int:
    """A+ → 5 ... D → 1; unknown letters rank 0."""
    return _RANKS.get(letter, 0)


def grade_message(letter: str) -> str:
    return _MESSAGES.get(letter, _FALLBACK_MESSAGE)


def ratio(tokens: int, lines: int) -> float:
    """Tokens per line, 0.0 for an empty file."""
    if lines == 0:
        return 0.0
    return tokens / lines


def pct(part: float, total: float) -> float:
    """``part`` as a percentage of ``total``; 0.0 when total is 0."""
    if total == 0:
        return 0.0
    return part / total * 100.0


def pct_delta(delta: int, base: int) -> float:
    """Signed change relative to ``base`` in percent; 0.0 when base is 0."""
    if base == 0:
        return 0.0
    return delta / base * 100.0
