"""Badge command: README markup for the project's efficiency grade."""

import typer

from ..grading import grade
from . import app
from ._common import console, load_stats

BADGE_LINK = "https://github.com/syntaxai/cargo-syntax"


def badge_url(letter_url: str, ratio_value: float, color: str) -> str:
    """shields.io static badge URL."""
    return (
        "https://img.shields.io/badge/token_efficiency-"
        f"{letter_url}%20({ratio_value:.1f}%20T/L)-{color}"
    )


@app.command()
def badge(ctx: typer.Context):
    """
    Generate a token efficiency badge for your README.
    """
    stats = load_stats(ctx)
    result = grade(stats.ratio)
    url = badge_url(result.url_letter, stats.ratio, result.color)

    out = [
        "Markdown:",
        f"[![Token Efficiency]({url})]({BADGE_LINK})",
        "",
        "HTML:",
        f'<a href="{BADGE_LINK}"><img src="{url}" alt="Token Efficiency"></a>',
        "",
        "reStructuredText:",
        f".. image:: {url}",
        f"   :target: {BADGE_LINK}",
        "   :alt: Token Efficiency",
    ]
    for line in out:
        console.print(line, markup=False, highlight=False, soft_wrap=True)
