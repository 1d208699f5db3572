"""Line splitting and code/comment/blank classification."""

from .models import LineCounts


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` the way a line iterator does.

    A single trailing newline does not produce an empty final line, and a
    trailing ``\\r`` is stripped from each line.
    """
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def classify_lines(text: str) -> LineCounts:
    """Count code, comment and blank lines.

    Single pass with a block-comment flag. String literals containing
    comment markers are not recognised.
    """
    code = comment = blank = 0
    in_block_comment = False

    for line in split_lines(text):
        trimmed = line.strip()
        if not trimmed:
            blank += 1
        elif in_block_comment:
            comment += 1
            if "*/" in trimmed:
                in_block_comment = False
        elif trimmed.startswith("//"):
            comment += 1
        elif trimmed.startswith("/*"):
            comment += 1
            if "*/" not in trimmed:
                in_block_comment = True
        else:
            code += 1

    return LineCounts(code=code, comment=comment, blank=blank)
