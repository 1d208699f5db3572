"""CLI entry point: registers all subcommands."""

import typer

from ._common import console

app = typer.Typer(
    name="token-audit",
    help="token-audit - measure and reduce the token cost of Rust code",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .audit import audit as _audit, top as _top  # noqa: F401, E402
from .badge import badge as _badge  # noqa: F401, E402
from .ci import ci as _ci  # noqa: F401, E402
from .deep import deep as _deep  # noqa: F401, E402
from .compare import compare as _compare, history as _history  # noqa: F401, E402
from .model import model as _model  # noqa: F401, E402
