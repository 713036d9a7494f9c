"""Read-only row/column projections of a loaded alignment."""

from typing import Iterator, List, Optional, Sequence, Tuple

from popgen_hub.core.types import Alignment


class AlignmentView:
    """
    Immutable projection of an alignment onto a row subset and a column subset.

    Row and column indices always refer to the source alignment, so views
    derived from views keep reporting original coordinates.
    """

    __slots__ = ("_source", "_rows", "_columns")

    def __init__(
        self,
        source: Alignment,
        rows: Optional[Sequence[int]] = None,
        columns: Optional[Sequence[int]] = None,
    ):
        self._source = source
        self._rows: Tuple[int, ...] = (
            tuple(range(source.num_sequences)) if rows is None else tuple(rows)
        )
        self._columns: Tuple[int, ...] = (
            tuple(range(source.width)) if columns is None else tuple(columns)
        )

    @classmethod
    def of(cls, alignment: Alignment) -> "AlignmentView":
        """View over the whole alignment."""
        return cls(alignment)

    @property
    def source(self) -> Alignment:
        return self._source

    @property
    def row_indices(self) -> Tuple[int, ...]:
        return self._rows

    @property
    def column_indices(self) -> Tuple[int, ...]:
        return self._columns

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._columns)

    @property
    def identifiers(self) -> List[str]:
        return [self._source.rows[r][0] for r in self._rows]

    def sequence(self, row: int) -> str:
        """Characters of the view's ``row``-th row over the view's columns."""
        seq = self._source.rows[self._rows[row]][1]
        return "".join(seq[c] for c in self._columns)

    def sequences(self) -> List[str]:
        return [self.sequence(i) for i in range(self.num_rows)]

    def column(self, position: int) -> str:
        """Characters of the view's ``position``-th column across the view's rows."""
        col = self._columns[position]
        return "".join(self._source.rows[r][1][col] for r in self._rows)

    def columns(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(source column index, column characters)`` in order."""
        for position, col in enumerate(self._columns):
            yield col, self.column(position)

    def restrict(
        self,
        rows: Optional[Sequence[int]] = None,
        columns: Optional[Sequence[int]] = None,
    ) -> "AlignmentView":
        """
        Derive a narrower view.

        Args:
            rows: Source row indices to keep; all of this view's rows if None.
            columns: Source column indices to keep; all of this view's columns if None.
        """
        return AlignmentView(
            self._source,
            self._rows if rows is None else rows,
            self._columns if columns is None else columns,
        )

    def __repr__(self) -> str:
        return (
            f"AlignmentView({self._source.name!r}, rows={self.num_rows}, "
            f"columns={self.width})"
        )
