"""Logging setup shared by the CLI and scripts."""

from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """Route the root logger through a rich handler on stderr."""
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=rich_tracebacks)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
