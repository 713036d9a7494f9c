"""Rendering of analysis results as tables, LaTeX, TSV or JSON."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from popgen_hub.core.exceptions import ConfigurationError
from popgen_hub.core.types import (
    AnalysisMode,
    AnalysisReport,
    PairwiseMatrix,
    StatisticBundle,
    WindowResult,
)

OUTPUT_FORMATS = ("table", "latex", "tsv", "json")

# (attribute, heading, LaTeX heading)
BUNDLE_FIELDS: List[Tuple[str, str, str]] = [
    ("n", "n", "$n$"),
    ("num_alleles", "k", "$k$"),
    ("heterozygosity", "H", "$H$"),
    ("expected_alleles", "E[k]", "$E[k]$"),
    ("partition_probability", "P(k)", "$P$"),
    ("total_length", "Length", "Length"),
    ("gap_free_length", "L", "$L$"),
    ("segregating_sites", "S", "$S$"),
    ("segregating_fraction", "s", "$s$"),
    ("theta_w", "Theta_w", r"$\theta_W$"),
    ("theta_w_per_site", "theta_w", r"$\theta_W/L$"),
    ("theta_w_se_no_recomb", "SE theta_w (no rec)", r"$SE_{\theta}^{nr}$"),
    ("theta_w_se_free_recomb", "SE theta_w (free rec)", r"$SE_{\theta}^{fr}$"),
    ("pi", "Pi", r"$\Pi$"),
    ("pi_per_site", "pi", r"$\pi$"),
    ("pi_se_no_recomb", "SE pi (no rec)", r"$SE_{\pi}^{nr}$"),
    ("pi_se_free_recomb", "SE pi (free rec)", r"$SE_{\pi}^{fr}$"),
    ("tajima_d", "Tajima's D", r"$D_T$"),
    ("fu_li_d_star", "Fu & Li's D*", r"$D^*$"),
    ("fu_li_f_star", "Fu & Li's F*", r"$F^*$"),
]


@dataclass(frozen=True)
class OutputOptions:
    """Presentation settings passed explicitly to the writer."""

    format: str = "table"
    header: bool = True
    per_site: bool = True
    precision: int = 5

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output format '{self.format}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
            )

    @classmethod
    def from_config(cls, config: Any, **overrides: Any) -> "OutputOptions":
        """Build options from an ``OutputConfig``, letting non-None overrides win."""
        values = {
            "format": config.format,
            "header": config.header,
            "per_site": config.per_site,
            "precision": config.precision,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _latex_escape(text: str) -> str:
    for char in ("\\", "&", "%", "$", "#", "_", "{", "}"):
        text = text.replace(char, "\\" + char)
    return text


class ResultWriter:
    """Writer for analysis reports in the configured format."""

    def __init__(self, options: Optional[OutputOptions] = None, console: Optional[Console] = None):
        """
        Initialize result writer.

        Args:
            options: Presentation options.
            console: Rich console for terminal output.
        """
        self.options = options or OutputOptions()
        self.console = console or Console()

    def write(self, reports: Sequence[AnalysisReport], output_path: Optional[Path] = None) -> None:
        """
        Render reports to the console or to ``output_path``.

        Args:
            reports: Reports to render, in output order.
            output_path: File to write instead of the console.
        """
        if output_path is None:
            self._emit(reports, self.console)
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            self._emit(reports, Console(file=f, width=200, color_system=None))

    def render(self, reports: Sequence[AnalysisReport]) -> str:
        """Text rendering for the latex, tsv and json formats."""
        fmt = self.options.format
        if fmt == "json":
            return json.dumps([r.to_dict() for r in reports], indent=2)
        if fmt == "table":
            raise ConfigurationError("Table output is rendered through a console")

        blocks = []
        bundles = [r.bundle for r in reports if r.bundle is not None]
        if bundles:
            blocks.append(self._render_bundles(bundles))
        for report in reports:
            if report.matrix is not None:
                blocks.append(self._render_matrix(report.matrix))
            if report.mode is AnalysisMode.WINDOW:
                blocks.append(self._render_windows(report.windows))
            elif report.mode is AnalysisMode.WINDOW_PAIRWISE:
                blocks.extend(self._render_window_matrices(report.windows))
        return "\n".join(blocks)

    def format_value(self, value: Any) -> str:
        """Format one cell; ``None`` is rendered as NA."""
        if value is None:
            return "NA"
        if isinstance(value, float):
            return f"{value:.{self.options.precision}f}"
        return str(value)

    # Console emission

    def _emit(self, reports: Sequence[AnalysisReport], console: Console) -> None:
        if self.options.format != "table":
            console.file.write(self.render(reports) + "\n")
            return

        bundles = [r.bundle for r in reports if r.bundle is not None]
        if bundles:
            console.print(self._bundle_table(bundles))
        for report in reports:
            if report.matrix is not None:
                console.print(self._matrix_table(report.matrix))
            if report.mode is AnalysisMode.WINDOW:
                console.print(self._window_table(report.alignment_name, report.windows))
            elif report.mode is AnalysisMode.WINDOW_PAIRWISE:
                for window in report.windows:
                    console.print(self._matrix_table(window.matrix, self._window_title(window)))

    def _bundle_table(self, bundles: List[StatisticBundle]) -> Table:
        table = Table(title="Population Genetics Statistics", show_header=self.options.header)
        table.add_column("Statistic", style="cyan")
        for bundle in bundles:
            heading = bundle.name + (f" ({bundle.label})" if bundle.label else "")
            table.add_column(heading, justify="right", style="green")
        for attr, heading, _ in BUNDLE_FIELDS:
            table.add_row(heading, *[self.format_value(getattr(b, attr)) for b in bundles])
        return table

    def _matrix_table(self, matrix: PairwiseMatrix, title: Optional[str] = None) -> Table:
        label = f" ({matrix.label})" if matrix.label else ""
        table = Table(
            title=title or f"Pairwise {matrix.statistic.value}: {matrix.name}{label}",
            show_header=self.options.header,
        )
        table.add_column("", style="cyan")
        for ident in matrix.identifiers[:-1]:
            table.add_column(ident, justify="right")
        for i, row in enumerate(matrix.rows()[1:], start=1):
            cells = [self.format_value(v) for v in row]
            cells += [""] * (len(matrix.identifiers) - 1 - len(cells))
            table.add_row(matrix.identifiers[i], *cells)
        return table

    def _window_table(self, name: str, windows: List[WindowResult]) -> Table:
        statistic = windows[0].statistic.value if windows else ""
        table = Table(title=f"Sliding windows: {name} {statistic}".rstrip(), show_header=self.options.header)
        for heading in ("Start", "End", "Midpoint", "Value"):
            table.add_column(heading, justify="right")
        for w in windows:
            table.add_row(str(w.start), str(w.end), self.format_value(w.midpoint), self.format_value(w.value))
        return table

    def _window_title(self, window: WindowResult) -> str:
        return f"{window.name} window {window.index + 1} [{window.start}-{window.end}]"

    # Text rendering

    def _render_bundles(self, bundles: List[StatisticBundle]) -> str:
        header = ["alignment", "label"] + [attr for attr, _, _ in BUNDLE_FIELDS]
        rows = [
            [b.name, b.label] + [self.format_value(getattr(b, attr)) for attr, _, _ in BUNDLE_FIELDS]
            for b in bundles
        ]
        if self.options.format == "latex":
            latex_header = ["Alignment", "Label"] + [tex for _, _, tex in BUNDLE_FIELDS]
            return self._latex_tabular(latex_header, rows, escape_header=False)
        return self._tsv(header, rows)

    def _render_matrix(self, matrix: PairwiseMatrix, caption: Optional[str] = None) -> str:
        header = [""] + list(matrix.identifiers[:-1])
        rows = []
        for i, row in enumerate(matrix.rows()[1:], start=1):
            cells = [self.format_value(v) for v in row]
            cells += [""] * (len(matrix.identifiers) - 1 - len(cells))
            rows.append([matrix.identifiers[i]] + cells)

        caption = caption or f"{matrix.name} pairwise {matrix.statistic.value}"
        if self.options.format == "latex":
            return f"% {caption}\n" + self._latex_tabular(header, rows)
        prefix = f"# {caption}\n" if self.options.header else ""
        return prefix + self._tsv(header, rows)

    def _render_windows(self, windows: List[WindowResult]) -> str:
        header = ["alignment", "start", "end", "midpoint", "statistic", "value"]
        rows = [
            [w.name, str(w.start), str(w.end), self.format_value(w.midpoint),
             w.statistic.value, self.format_value(w.value)]
            for w in windows
        ]
        if self.options.format == "latex":
            return self._latex_tabular(header, rows)
        return self._tsv(header, rows)

    def _render_window_matrices(self, windows: List[WindowResult]) -> List[str]:
        return [self._render_matrix(w.matrix, self._window_title(w)) for w in windows]

    def _tsv(self, header: List[str], rows: Iterable[List[str]]) -> str:
        lines = ["\t".join(header)] if self.options.header else []
        lines.extend("\t".join(row) for row in rows)
        return "\n".join(lines)

    def _latex_tabular(
        self,
        header: List[str],
        rows: Iterable[List[str]],
        escape_header: bool = True,
    ) -> str:
        lines = [
            "\\begin{tabular}{l" + "r" * (len(header) - 1) + "}",
            "\\hline",
        ]
        if self.options.header:
            cells = [_latex_escape(h) for h in header] if escape_header else header
            lines.append(" & ".join(cells) + " \\\\")
            lines.append("\\hline")
        for row in rows:
            lines.append(" & ".join(_latex_escape(c) for c in row) + " \\\\")
        lines.append("\\hline")
        lines.append("\\end{tabular}")
        return "\n".join(lines)
