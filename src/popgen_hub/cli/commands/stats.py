"""Stats command for alignment analysis."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from popgen_hub.core.exceptions import ConfigurationError, PopGenHubError

app = typer.Typer(help="Compute population genetics statistics")
console = Console()
logger = logging.getLogger(__name__)


def select_mode(pairwise: bool, window: bool):
    """Analysis mode for the given flag combination."""
    from popgen_hub.core.types import AnalysisMode

    if pairwise and window:
        return AnalysisMode.WINDOW_PAIRWISE
    if window:
        return AnalysisMode.WINDOW
    if pairwise:
        return AnalysisMode.PAIRWISE
    return AnalysisMode.WHOLE


@app.command("run")
def stats_run(
    ctx: typer.Context,
    alignments: List[Path] = typer.Argument(..., help="Alignment files (FASTA or Stockholm)"),
    pairwise: bool = typer.Option(
        False, "--pairwise", "-p", help="Report pairwise nucleotide diversity matrices"
    ),
    window: Optional[str] = typer.Option(
        None,
        "--window", "-w",
        help=(
            "Sliding window as WIDTH,STEP[,STATISTIC] (diversity, watterson, tajima_d), "
            "or 'default' for the configured window"
        ),
    ),
    per_site: Optional[bool] = typer.Option(
        None, "--per-site/--absolute", help="Normalise diversity and Watterson's estimator per site"
    ),
    label: str = typer.Option("", "--label", "-l", help="Label attached to every result"),
    fmt: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, latex, tsv or json"
    ),
    header: Optional[bool] = typer.Option(None, "--header/--no-header", help="Print column headers"),
    input_format: Optional[str] = typer.Option(
        None, "--input-format", "-i", help="Alignment format: fasta or stockholm (default: by suffix)"
    ),
    gap: Optional[str] = typer.Option(None, "--gap", help="Gap character"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results to this file"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
):
    """Compute statistics for every alignment record of every input file."""
    from popgen_hub.core.config import Settings, get_settings
    from popgen_hub.core.logging_setup import configure_logging
    from popgen_hub.core.types import AnalysisMode, WindowSpec, WindowStatistic
    from popgen_hub.io.loader import load_alignments
    from popgen_hub.io.writers.report_writer import OutputOptions, ResultWriter
    from popgen_hub.popgen.modes import AnalysisModeController

    try:
        if config and not config.exists():
            raise ConfigurationError(f"Configuration file not found: {config}")
        if config:
            settings = Settings.load(config)
            configure_logging(settings.logging.level, (ctx.obj or {}).get("verbose", False))
        else:
            settings = get_settings()

        gap_char = settings.alignment.gap_char if gap is None else gap
        if len(gap_char) != 1:
            raise ConfigurationError(f"Gap symbol must be a single character, got {gap_char!r}")

        if window is None:
            spec = None
        elif window.strip().lower() == "default":
            spec = settings.window.to_spec()
        else:
            spec = WindowSpec.parse(window)
        mode = select_mode(pairwise, spec is not None)
        if mode is AnalysisMode.WINDOW_PAIRWISE and spec.statistic is not WindowStatistic.DIVERSITY:
            logger.info("Pairwise windows report diversity; ignoring '%s'", spec.statistic.value)
            spec = spec.forced_diversity()

        options = OutputOptions.from_config(
            settings.output, format=fmt.lower() if fmt else None, header=header, per_site=per_site
        )

        records = []
        for path in alignments:
            records.extend(
                load_alignments(
                    path,
                    fmt=input_format,
                    gap_char=gap_char,
                    default_molecule_type=settings.alignment.default_molecule_type,
                )
            )

        controller = AnalysisModeController(
            gap_char=gap_char,
            per_site=options.per_site,
            label=label,
            min_sequences=settings.alignment.min_sequences,
        )
        reports = list(controller.run(records, mode, spec))
        ResultWriter(options, console).write(reports, output)
    except PopGenHubError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output:
        console.print(f"\nResults saved to: {output}")


@app.command("constants")
def stats_constants(
    n: int = typer.Argument(..., help="Sample size"),
):
    """Show the coalescent constants for a sample of N sequences."""
    from popgen_hub.popgen.constants import coalescent_constants

    if n < 2:
        console.print(f"[red]Error: sample size must be at least 2, got {n}[/red]")
        raise typer.Exit(1)

    constants = coalescent_constants(n)

    table = Table(title=f"Coalescent constants (n={n})")
    table.add_column("Term", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for term in ("a1", "a2", "b1", "b2", "c1", "c2", "e1", "e2"):
        table.add_row(term, f"{getattr(constants, term):.8f}")

    console.print(table)


@app.callback()
def callback():
    """Population genetics statistics commands."""
    pass
