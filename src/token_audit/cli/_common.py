"""Shared CLI helpers."""

from pathlib import Path

import typer
from rich.console import Console

from ..config import AuditConfig
from ..exceptions import TokenAuditError
from ..scanning import ProjectStats, scan_project

console = Console()


def get_config(ctx: typer.Context) -> AuditConfig:
    """Config resolved by the app callback (defaults if invoked bare)."""
    obj = ctx.obj or {}
    return obj.get("config") or AuditConfig()


def get_root(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    root = obj.get("path")
    return Path(root) if root is not None else Path(get_config(ctx).source_root)


def load_stats(ctx: typer.Context) -> ProjectStats:
    """Scan the project root, turning analysis errors into exit code 1."""
    try:
        return scan_project(get_root(ctx), get_config(ctx))
    except TokenAuditError as e:
        fail(e)


def fail(error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


def separator(width: int) -> str:
    return "─" * width
