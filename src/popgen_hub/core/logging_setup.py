"""Logging configuration for Population Genetics Hub."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "popgen_hub"


def configure_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """
    Attach a rich handler to the package logger.

    Args:
        level: Logging level name used when not verbose.
        verbose: Force DEBUG output.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logger.setLevel(resolved)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def log_invocation(log_path: Optional[Path], argv: Optional[Sequence[str]] = None) -> None:
    """Append the command line of this run to the invocation log, if one is configured."""
    if log_path is None:
        return
    argv = list(sys.argv if argv is None else argv)
    log_path = Path(log_path).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a") as f:
        f.write(f"{datetime.now().isoformat(timespec='seconds')}\t{' '.join(argv)}\n")
    logging.getLogger(__name__).debug("Recorded invocation in %s", log_path)
