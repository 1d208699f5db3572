"""Model command: the identifier handed to LLM-driven tooling."""

from typing import Optional

import typer

from ..config import MODEL_ENV_VAR
from . import app
from ._common import console, get_config


@app.command()
def model(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(
        None,
        "--model",
        help=f"Override the model (default: config, then ${MODEL_ENV_VAR})",
    ),
):
    """
    Print the chat model identifier that rewrite tooling should use.
    """
    console.print(name or get_config(ctx).model, markup=False, highlight=False)
