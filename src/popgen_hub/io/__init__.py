"""Input/Output handlers for Population Genetics Hub."""

from popgen_hub.io.parsers.fasta import FastaAlignmentParser
from popgen_hub.io.parsers.stockholm import StockholmAlignmentParser
from popgen_hub.io.loader import load_alignments, guess_format
from popgen_hub.io.writers.report_writer import OutputOptions, ResultWriter

__all__ = [
    "FastaAlignmentParser",
    "StockholmAlignmentParser",
    "load_alignments",
    "guess_format",
    "OutputOptions",
    "ResultWriter",
]
