"""Stockholm alignment parser."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from popgen_hub.core.exceptions import AlignmentFormatError, InputValidationError
from popgen_hub.core.types import Alignment, MoleculeType
from popgen_hub.io.parsers.fasta import detect_molecule_type, read_input


class StockholmAlignmentParser:
    """
    Parser for Stockholm files.

    A file may hold several ``//``-terminated records; each becomes its own
    alignment. Interleaved blocks of the same sequence are concatenated and
    ``#`` markup lines are ignored. Stockholm's ``.`` gap is mapped to the
    configured gap symbol.
    """

    def __init__(
        self,
        gap_char: str = "-",
        default_molecule_type: MoleculeType = MoleculeType.PROTEIN,
    ):
        self.gap_char = gap_char
        self.default_molecule_type = default_molecule_type

    def parse(self, input_data: Union[str, Path], name: str = "") -> List[Alignment]:
        """
        Parse every record of a Stockholm file or string.

        Args:
            input_data: Path to Stockholm file or its content as string.
            name: Base name for the alignments; the file stem when reading a file.

        Returns:
            One alignment per record, in file order.

        Raises:
            InputValidationError: If no records are found or a record is malformed.
        """
        content = read_input(input_data, "# STOCKHOLM", "Stockholm")
        if not name:
            name = Path(input_data).stem if content is not input_data else "alignment"

        alignments = []
        rows: Dict[str, List[str]] = {}
        record_name: Optional[str] = None
        in_record = False

        for line_number, line in enumerate(content.split("\n"), start=1):
            stripped = line.strip()

            if stripped.startswith("# STOCKHOLM"):
                in_record = True
                rows = {}
                record_name = None
            elif stripped == "//":
                if not in_record:
                    raise AlignmentFormatError("Stockholm", "terminator without header", line_number)
                alignments.append(self._build(rows, record_name, name, len(alignments)))
                in_record = False
            elif stripped.startswith("#=GF ID"):
                record_name = stripped[len("#=GF ID"):].strip() or None
            elif stripped and not stripped.startswith("#"):
                if not in_record:
                    raise AlignmentFormatError("Stockholm", "sequence line outside a record", line_number)
                parts = stripped.split(None, 1)
                if len(parts) < 2:
                    raise AlignmentFormatError("Stockholm", f"sequence '{parts[0]}' has no data", line_number)
                rows.setdefault(parts[0], []).append(parts[1].replace(" ", ""))

        if in_record:
            raise AlignmentFormatError("Stockholm", "missing '//' terminator", 0)
        if not alignments:
            raise InputValidationError("No alignments found in Stockholm input", "input_data")
        return alignments

    def _build(
        self,
        rows: Dict[str, List[str]],
        record_name: Optional[str],
        base_name: str,
        index: int,
    ) -> Alignment:
        sequences = [
            (ident, "".join(blocks).replace(".", self.gap_char))
            for ident, blocks in rows.items()
        ]
        if record_name is None:
            record_name = base_name if index == 0 else f"{base_name}_{index + 1}"
        molecule_type = detect_molecule_type(
            [seq for _, seq in sequences], self.gap_char, self.default_molecule_type
        )
        return Alignment(name=record_name, rows=sequences, molecule_type=molecule_type)
