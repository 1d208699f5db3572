"""Revision commands: compare against a branch, token history of commits."""

from typing import Optional

import typer
from rich.table import Table

from ..exceptions import TokenAuditError
from ..grading import grade, pct_delta
from ..revisions import GitRevisionReader, RevisionStats
from . import app
from ._common import console, fail, get_config, get_root, load_stats

# T/L difference below which two revisions count as equally efficient
RATIO_TOLERANCE = 0.1


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _signed(value: float, fmt: str = "d") -> str:
    return f"{value:+{fmt}}"


@app.command()
def compare(
    ctx: typer.Context,
    branch: str = typer.Argument(..., help="Branch, tag or commit to compare against"),
):
    """
    Compare token efficiency of the working tree against a revision.

    [bold cyan]Examples:[/bold cyan]

      token-audit compare main
    """
    root = get_root(ctx)
    reader = GitRevisionReader(root, build_dir=get_config(ctx).build_dir)

    try:
        current_name = reader.current_branch()
        target = reader.count_tokens_at(branch)
    except TokenAuditError as e:
        fail(e)

    stats = load_stats(ctx)
    current = RevisionStats(
        revision=current_name,
        files=len(stats.files),
        tokens=stats.total_tokens,
        lines=stats.total_lines,
    )

    console.print(f"Comparing token efficiency: [bold]{current.revision}[/bold] vs [bold]{branch}[/bold]")
    console.print()

    table = Table(show_header=True, pad_edge=False)
    table.add_column("")
    table.add_column(current.revision, justify="right")
    table.add_column(target.revision, justify="right")
    table.add_column("Delta", justify="right")
    for label, cur, tgt in (
        ("Files", current.files, target.files),
        ("Lines", current.lines, target.lines),
        ("Tokens", current.tokens, target.tokens),
    ):
        table.add_row(label, str(cur), str(tgt), _signed(cur - tgt))

    ratio_delta = current.ratio - target.ratio
    table.add_row(
        "T/L ratio", f"{current.ratio:.1f}", f"{target.ratio:.1f}", _signed(ratio_delta, ".1f")
    )
    table.add_row("Grade", grade(current.ratio).letter, grade(target.ratio).letter, "")
    console.print(table)
    console.print()

    if ratio_delta < -RATIO_TOLERANCE:
        console.print("Current tree is more token-efficient (lower T/L ratio)")
    elif ratio_delta > RATIO_TOLERANCE:
        console.print("Current tree is less token-efficient (higher T/L ratio)")
    else:
        console.print(f"Both have similar token efficiency (T/L ratio within {RATIO_TOLERANCE})")

    token_delta = current.tokens - target.tokens
    if token_delta != 0:
        console.print(
            f"Token delta: {_signed(token_delta)} "
            f"({_signed(pct_delta(token_delta, target.tokens), '.1f')}%)"
        )


@app.command()
def history(
    ctx: typer.Context,
    n: Optional[int] = typer.Argument(
        None,
        help="Number of commits to scan (default: config history_commits)",
        min=1,
        show_default=False,
    ),
):
    """
    Show token totals for recent commits and the overall trend.

    [bold cyan]Examples:[/bold cyan]

      token-audit history

      token-audit history 30
    """
    count = n if n is not None else get_config(ctx).history_commits
    reader = GitRevisionReader(get_root(ctx), build_dir=get_config(ctx).build_dir)

    try:
        commits = reader.recent_commits(count)
        if not commits:
            fail(TokenAuditError("No commits found"))
        console.print(f"Scanning {len(commits)} commits for token trends...")
        console.print()
        snapshots = [(c, reader.count_tokens_at(c.hash)) for c in commits]
    except TokenAuditError as e:
        fail(e)

    table = Table(show_header=True, pad_edge=False)
    table.add_column("Commit")
    table.add_column("Files", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("T/L", justify="right")
    table.add_column("Message")

    # Oldest first
    for commit, rev in reversed(snapshots):
        table.add_row(
            commit.hash,
            str(rev.files),
            str(rev.tokens),
            str(rev.lines),
            f"{rev.ratio:.1f}",
            _truncate(commit.message, 30),
        )
    console.print(table)

    if len(snapshots) >= 2:
        newest = snapshots[0][1]
        oldest = snapshots[-1][1]
        delta = newest.tokens - oldest.tokens
        console.print()
        console.print(
            f"Trend: {_signed(delta)} tokens "
            f"({_signed(pct_delta(delta, oldest.tokens), '.1f')}%) over {len(snapshots)} commits"
        )
