"""Aligned FASTA parser."""

from pathlib import Path
from typing import Union

from popgen_hub.core.exceptions import AlignmentFormatError, InputValidationError
from popgen_hub.core.types import Alignment, MoleculeType

NUCLEOTIDE_CHARS = set("ACGTU")


def detect_molecule_type(
    sequences: list[str],
    gap_char: str = "-",
    default: MoleculeType = MoleculeType.PROTEIN,
) -> MoleculeType:
    """Detect molecule type from the residues of an alignment."""
    unique_chars = set("".join(sequences).upper()) - {gap_char}
    if unique_chars and unique_chars <= NUCLEOTIDE_CHARS:
        if "U" in unique_chars:
            return MoleculeType.RNA
        return MoleculeType.DNA
    return default


def read_input(input_data: Union[str, Path], marker: str, fmt: str) -> str:
    """Return text content, reading ``input_data`` as a path unless it starts with ``marker``."""
    if isinstance(input_data, Path) or (
        isinstance(input_data, str) and not input_data.lstrip().startswith(marker)
    ):
        path = Path(input_data)
        if not path.exists():
            raise InputValidationError(f"{fmt} file not found: {path}", "input_path")
        return path.read_text()
    return input_data


class FastaAlignmentParser:
    """Parser for aligned FASTA files; one file holds one alignment."""

    def __init__(
        self,
        gap_char: str = "-",
        default_molecule_type: MoleculeType = MoleculeType.PROTEIN,
    ):
        self.gap_char = gap_char
        self.default_molecule_type = default_molecule_type

    def parse(self, input_data: Union[str, Path], name: str = "") -> list[Alignment]:
        """
        Parse aligned FASTA from a file path or string content.

        Args:
            input_data: Path to FASTA file or FASTA content as string.
            name: Alignment name; the file stem when reading a file.

        Returns:
            A single-element list holding the alignment.

        Raises:
            InputValidationError: If parsing fails or rows differ in length.
        """
        content = read_input(input_data, ">", "FASTA")
        if not name:
            name = Path(input_data).stem if content is not input_data else "alignment"
        return [self._parse_content(content, name)]

    def _parse_content(self, content: str, name: str) -> Alignment:
        """Parse FASTA content string."""
        rows = []
        current_id = None
        current_seq_lines = []

        for line_number, line in enumerate(content.strip().split("\n"), start=1):
            line = line.strip()
            if not line:
                continue

            if line.startswith(">"):
                # Save previous sequence if exists
                if current_id is not None:
                    rows.append((current_id, "".join(current_seq_lines)))

                header = line[1:].strip()
                parts = header.split(None, 1)
                current_id = parts[0] if parts else f"seq_{len(rows) + 1}"
                current_seq_lines = []
            elif current_id is None:
                raise AlignmentFormatError("FASTA", "sequence data before first header", line_number)
            else:
                current_seq_lines.append(line)

        # Save last sequence
        if current_id is not None:
            rows.append((current_id, "".join(current_seq_lines)))

        if not rows:
            raise InputValidationError("No sequences found in FASTA input", "input_data")

        molecule_type = detect_molecule_type(
            [seq for _, seq in rows], self.gap_char, self.default_molecule_type
        )
        return Alignment(name=name, rows=rows, molecule_type=molecule_type)
