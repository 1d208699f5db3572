"""CI gate command."""

import json
from typing import Optional

import click
import typer

from ..config import GRADE_LETTERS
from ..gate import GateResult, evaluate_gate
from . import app
from ._common import console, get_config, load_stats


def _print_human(result: GateResult) -> None:
    console.print(
        f"token-audit ci: {result.files} files, {result.total_tokens} tokens, "
        f"{result.ratio:.1f} T/L, grade {result.grade}",
        highlight=False,
    )
    if result.passed:
        console.print("[green]PASS[/green]")
        return

    console.print()
    for failure in result.failures:
        console.print(f"  [red]FAIL:[/red] {failure}", highlight=False)
    console.print()
    console.print(f"[red]FAILED[/red] ({len(result.failures)} check(s))")


@app.command()
def ci(
    ctx: typer.Context,
    max_tokens: Optional[int] = typer.Option(
        None,
        "--max-tokens",
        help="Fail if the project exceeds this many tokens",
        min=0,
    ),
    max_tl: Optional[float] = typer.Option(
        None,
        "--max-tl",
        help="Fail if the project T/L ratio is above this",
        min=0.0,
    ),
    min_grade: Optional[str] = typer.Option(
        None,
        "--min-grade",
        help="Fail if the grade is below this",
        click_type=click.Choice(list(GRADE_LETTERS)),
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Check token budgets and exit non-zero on failure.

    Limits not given on the command line fall back to the ci_* config values.

    [bold cyan]Examples:[/bold cyan]

      token-audit ci --max-tokens 50000

      token-audit ci --max-tl 8 --min-grade B --json
    """
    config = get_config(ctx)
    stats = load_stats(ctx)
    result = evaluate_gate(
        stats,
        max_tokens=max_tokens if max_tokens is not None else config.ci_max_tokens,
        max_tl=max_tl if max_tl is not None else config.ci_max_tl,
        min_grade=min_grade if min_grade is not None else config.ci_min_grade,
    )

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_human(result)

    if not result.passed:
        raise typer.Exit(1)
