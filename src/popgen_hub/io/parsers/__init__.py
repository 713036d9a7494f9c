"""Parsers for alignment formats."""

from popgen_hub.io.parsers.fasta import FastaAlignmentParser, detect_molecule_type
from popgen_hub.io.parsers.stockholm import StockholmAlignmentParser

__all__ = [
    "FastaAlignmentParser",
    "StockholmAlignmentParser",
    "detect_molecule_type",
]
