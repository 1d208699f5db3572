"""App callback: global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..config import load_config
from ..exceptions import TokenAuditError
from ..logging_config import setup_logging
from . import app
from ._common import console, fail


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Project root to scan (default: configured source_root)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug details to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Measure the token cost of a Rust source tree.

    Tokens are counted with the o200k_base BPE vocabulary. Files under
    [bold]target/[/bold] are never scanned.

    [bold cyan]Examples:[/bold cyan]

      token-audit audit

      token-audit top 20

      token-audit ci --max-tl 8 --min-grade B --json

      token-audit -C path/to/crate deep
    """
    if version:
        from .. import __version__

        console.print(f"[bold cyan]token-audit[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    try:
        settings = load_config(config_file=config, verbose=verbose)
    except TokenAuditError as e:
        fail(e)

    setup_logging(verbose=settings.verbosity == "verbose", quiet=settings.verbosity == "quiet")

    ctx.ensure_object(dict)
    ctx.obj["config"] = settings
    ctx.obj["path"] = path if path is not None else Path(settings.source_root)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)
