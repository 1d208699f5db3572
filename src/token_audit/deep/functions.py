"""Top-level function extraction by brace balancing.

This is a line heuristic, not a parser: ``fn`` inside strings or comments
can be picked up, and braces inside literals are counted.
"""

import re

from ..scanning.lines import split_lines
from .models import FnInfo

_IDENT_RE = re.compile(r"[A-Za-z0-9_]*")


def _is_fn_prefix(before: str) -> bool:
    """Accepts ``fn``, ``pub fn``, ``pub(crate) fn``, ``async fn``, ``unsafe fn``."""
    stripped = before.rstrip()
    return (
        not before
        or stripped.endswith("pub")
        or "pub(" in before
        or stripped.endswith("async")
        or stripped.endswith("unsafe")
    )


def _closing_line(lines: list[str], brace_line: int) -> int:
    """Line where the brace opened on ``brace_line`` is closed.

    If the braces never balance the opening line is returned.
    """
    depth = 0
    for li in range(brace_line, len(lines)):
        line = lines[li]
        depth += line.count("{") - line.count("}")
        if depth == 0:
            return li
    return brace_line


def extract_functions(content: str) -> list[FnInfo]:
    """Locate function definitions in Rust source text."""
    lines = split_lines(content)
    fns: list[FnInfo] = []

    i = 0
    while i < len(lines):
        trimmed = lines[i].strip()
        fn_pos = trimmed.find("fn ")

        if fn_pos >= 0 and _is_fn_prefix(trimmed[:fn_pos]):
            name = _IDENT_RE.match(trimmed, fn_pos + 3).group(0)
            if name:
                brace_line = i
                while brace_line < len(lines) and "{" not in lines[brace_line]:
                    brace_line += 1

                if brace_line < len(lines):
                    end = _closing_line(lines, brace_line)
                    fns.append(FnInfo(name=name, line=i, body="\n".join(lines[i : end + 1])))
                    i = end + 1
                    continue
        i += 1

    return fns
