"""CLI command modules."""

from popgen_hub.cli.commands import (
    stats,
    config,
)

__all__ = ["stats", "config"]
