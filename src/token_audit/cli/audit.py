"""Audit and top commands: per-file token tables."""

from typing import Optional

import typer
from rich.table import Table

from ..grading import grade, grade_message, pct
from . import app
from ._common import console, get_config, load_stats


@app.command()
def audit(ctx: typer.Context):
    """
    Audit token count and lines of code per file.

    [bold cyan]Examples:[/bold cyan]

      token-audit audit

      token-audit -C crates/core audit
    """
    stats = load_stats(ctx)

    table = Table(show_header=True, show_footer=True, pad_edge=False)
    table.add_column("File", footer="Total", overflow="fold")
    table.add_column("Lines", justify="right", footer=str(stats.total_lines))
    table.add_column("Tokens", justify="right", footer=str(stats.total_tokens))
    table.add_column("T/L", justify="right", footer=f"{stats.ratio:.1f}")

    for f in stats.files:
        table.add_row(f.path, str(f.lines), str(f.tokens), f"{f.ratio:.1f}")

    console.print(table)
    console.print()
    console.print(
        f"Code: {stats.code_lines} | Comments: {stats.comment_lines} | Blanks: {stats.blank_lines}"
    )
    console.print()

    result = grade(stats.ratio)
    console.print(f"Token efficiency: [bold]{result.letter}[/bold] ({stats.ratio:.1f} tokens/line)")
    console.print(grade_message(result.letter))


@app.command()
def top(
    ctx: typer.Context,
    n: Optional[int] = typer.Argument(
        None,
        help="Number of files to show (default: config top_n)",
        min=1,
        show_default=False,
    ),
):
    """
    Show the N most token-heavy files.

    [bold cyan]Examples:[/bold cyan]

      token-audit top

      token-audit top 25
    """
    count = n if n is not None else get_config(ctx).top_n
    stats = load_stats(ctx)
    ranked = stats.sorted_by_tokens()[:count]

    console.print(f"[bold cyan]Top {len(ranked)} most token-heavy files[/bold cyan]")
    console.print()

    table = Table(show_header=True, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("File", overflow="fold")
    table.add_column("Lines", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("T/L", justify="right")
    table.add_column("% Tot", justify="right")

    for i, f in enumerate(ranked, 1):
        table.add_row(
            str(i),
            f.path,
            str(f.lines),
            str(f.tokens),
            f"{f.ratio:.1f}",
            f"{pct(f.tokens, stats.total_tokens):.1f}%",
        )
    console.print(table)

    top_tokens = sum(f.tokens for f in ranked)
    console.print(
        f"Top {len(ranked)} = {top_tokens} tokens "
        f"({pct(top_tokens, stats.total_tokens):.1f}% of {stats.total_tokens} total)"
    )
