"""Deep command: duplicated blocks and near-duplicate functions."""

import typer
from rich.markup import escape

from .. import deep as deep_analysis
from ..deep import DeepResult, DuplicateCluster
from ..grading import pct
from ..scanning import ProjectStats
from . import app
from ._common import console, get_config, load_stats, separator

# Locations listed per cluster before collapsing into "(+N more)"
MAX_LOCATIONS = 3


def _cluster_locations(cluster: DuplicateCluster, stats: ProjectStats) -> str:
    locs = [f"{stats.files[occ.file_idx].path}:{occ.start + 1}" for occ in cluster.occurrences]
    if len(locs) > MAX_LOCATIONS:
        rest = len(locs) - 2
        return f"{', '.join(locs[:2])}, (+{rest} more)"
    return ", ".join(locs)


def print_results(result: DeepResult, stats: ProjectStats) -> None:
    idx = 0

    if result.clusters:
        console.print("[bold cyan]Cross-file duplicates[/bold cyan]")
        console.print()
        for cluster in result.clusters:
            idx += 1
            console.print(
                f"  {idx}. {cluster.span}-line block duplicated in "
                f"{len(cluster.occurrences)} places across {cluster.file_count} files"
            )
            preview = " | ".join(cluster.preview.splitlines()[:2])
            console.print(f"     [dim]{escape(preview)}[/dim]", highlight=False)
            console.print(f"     Files: {_cluster_locations(cluster, stats)}", highlight=False)
            console.print(f"     Saves: ~{cluster.savings} tokens")
            console.print()

    if result.near_duplicates:
        console.print("[bold cyan]Near-duplicate functions[/bold cyan]")
        console.print()
        for nd in result.near_duplicates:
            idx += 1
            path = stats.files[nd.file_idx].path
            console.print(
                f"  {idx}. {nd.fn_a[0]} ≈ {nd.fn_b[0]} ({nd.similarity:.0%} similar)",
                highlight=False,
            )
            console.print(f"     File: {path}:{nd.fn_a[1] + 1}, :{nd.fn_b[1] + 1}", highlight=False)
            console.print(f"     Saves: ~{nd.savings} tokens")
            console.print()

    console.print(separator(70))
    save_pct = pct(result.total_savings, stats.total_tokens)
    console.print(
        f"Deep analysis: {result.pattern_count} pattern(s), "
        f"~{result.total_savings} tokens saveable ({save_pct:.1f}% of project)"
    )


@app.command()
def deep(ctx: typer.Context):
    """
    Find duplicated blocks across files and near-duplicate functions.

    Blocks are matched on whitespace-normalized text; functions are compared
    by word overlap within each file.
    """
    stats = load_stats(ctx)
    result = deep_analysis.run(stats, get_config(ctx).thresholds)

    if result.is_empty:
        console.print("No duplication found.")
        return

    print_results(result, stats)
