"""
Logging configuration for token-audit.

Diagnostics go to stderr through a rich handler so table output on stdout
stays clean.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging

    Returns:
        Configured logger instance for token_audit
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # stdout carries tables and JSON
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True
    )

    logger = logging.getLogger("token_audit")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'token_audit.scanning.scanner')
              If None, returns the root token_audit logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("token_audit")

    if not name.startswith("token_audit"):
        name = f"token_audit.{name}"

    return logging.getLogger(name)
