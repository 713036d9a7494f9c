"""Gap-free and segregating site filtering."""

from dataclasses import dataclass
from typing import Tuple

from popgen_hub.popgen.alignment import AlignmentView

DEFAULT_GAP_CHAR = "-"


@dataclass(frozen=True)
class SiteSets:
    """A view narrowed to its gap-free columns and to its segregating columns."""

    gap_free: AlignmentView
    segregating: AlignmentView

    @property
    def gap_free_length(self) -> int:
        return self.gap_free.width

    @property
    def segregating_sites(self) -> int:
        return self.segregating.width


class SiteFilter:
    """Select columns of an alignment view by gap content and variability."""

    def __init__(self, gap_char: str = DEFAULT_GAP_CHAR):
        self.gap_char = gap_char

    def gap_free_columns(self, view: AlignmentView) -> Tuple[int, ...]:
        """Source indices of the view's columns with no gap in any of its rows."""
        return tuple(
            col for col, chars in view.columns() if self.gap_char not in chars
        )

    def segregating_columns(self, view: AlignmentView) -> Tuple[int, ...]:
        """Source indices of gap-free columns holding more than one residue."""
        return self.split(view).segregating.column_indices

    def split(self, view: AlignmentView) -> SiteSets:
        """Narrow ``view`` to its gap-free columns and its segregating columns."""
        gap_free = view.restrict(columns=self.gap_free_columns(view))
        segregating = gap_free.restrict(
            columns=[col for col, chars in gap_free.columns() if len(set(chars)) > 1]
        )
        return SiteSets(gap_free=gap_free, segregating=segregating)
