"""Alignment loading with format selection."""

import logging
from pathlib import Path
from typing import List, Optional

from popgen_hub.core.exceptions import ConfigurationError, InputValidationError
from popgen_hub.core.types import Alignment, MoleculeType
from popgen_hub.io.parsers.fasta import FastaAlignmentParser
from popgen_hub.io.parsers.stockholm import StockholmAlignmentParser

logger = logging.getLogger(__name__)

STOCKHOLM_SUFFIXES = {".sto", ".stk", ".stockholm"}
FORMATS = ("fasta", "stockholm")


def guess_format(path: Path) -> str:
    """Alignment format implied by the file suffix."""
    return "stockholm" if Path(path).suffix.lower() in STOCKHOLM_SUFFIXES else "fasta"


def load_alignments(
    path: Path,
    fmt: Optional[str] = None,
    gap_char: str = "-",
    default_molecule_type: MoleculeType = MoleculeType.DNA,
) -> List[Alignment]:
    """
    Load every alignment record from a file.

    Args:
        path: Alignment file.
        fmt: ``"fasta"`` or ``"stockholm"``; guessed from the suffix if None.
        gap_char: Gap symbol of the alignment.
        default_molecule_type: Molecule type when residues are not nucleotides.

    Returns:
        Alignments in file order.
    """
    path = Path(path)
    if not path.exists():
        raise InputValidationError(f"Alignment file not found: {path}", "input_path")

    fmt = (fmt or guess_format(path)).lower()
    if fmt == "fasta":
        parser = FastaAlignmentParser(gap_char, default_molecule_type)
    elif fmt == "stockholm":
        parser = StockholmAlignmentParser(gap_char, default_molecule_type)
    else:
        raise ConfigurationError(f"Unknown alignment format '{fmt}' (expected one of: {', '.join(FORMATS)})")

    alignments = parser.parse(path)
    logger.debug("Loaded %d alignment(s) from %s as %s", len(alignments), path, fmt)
    return alignments
