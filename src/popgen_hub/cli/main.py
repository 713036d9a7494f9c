"""Main CLI entry point for Population Genetics Hub."""

import typer
from rich.console import Console

from popgen_hub import __version__
from popgen_hub.cli.commands import (
    stats,
    config,
)

app = typer.Typer(
    name="pghub",
    help="Population Genetics Hub - Summary statistics for multiple sequence alignments",
    add_completion=False,
)

console = Console()

# Register sub-commands
app.add_typer(stats.app, name="stats", help="Compute population genetics statistics")
app.add_typer(config.app, name="config", help="Show and create configuration files")


@app.command()
def version():
    """Show version information."""
    console.print(f"Population Genetics Hub v{__version__}")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Population Genetics Hub - Summary statistics for multiple sequence alignments."""
    from popgen_hub.core.config import get_settings
    from popgen_hub.core.exceptions import PopGenHubError
    from popgen_hub.core.logging_setup import configure_logging, log_invocation

    try:
        settings = get_settings()
    except PopGenHubError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    ctx.obj = {"verbose": verbose}
    configure_logging(settings.logging.level, verbose)
    log_invocation(settings.logging.invocation_log)


if __name__ == "__main__":
    app()
