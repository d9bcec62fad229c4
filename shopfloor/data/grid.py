"""
Table model behind the faceted work-order grids.

`FacetGrid` follows the lifecycle of the browser table widget it replaces:
construct with column labels and facet panes, add positional rows, draw, then
rebuild every pane so option counts reflect the inserted rows. Selection,
search, sorting and paging are pure functions of the stored rows so the
Streamlit layer only has to collect widget state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from shopfloor.data.facets import FacetOption, to_number

Row = Tuple[str, ...]
SortKey = Callable[[str], Tuple[int, object]]

PAGE_LENGTHS: List[Optional[int]] = [10, 25, 50, 100, None]  # None -> All
DEFAULT_ROW_CLASS = "confident"


def natural_sort_key(value: str) -> Tuple[int, object]:
    number = to_number(value)
    if number is not None:
        return (0, number)
    return (1, str(value).casefold())


@dataclass
class FacetPane:
    column: int
    header: str
    options: List[FacetOption]
    counts: Dict[str, int] = field(default_factory=dict)

    def option(self, label: str) -> FacetOption:
        for opt in self.options:
            if opt.label == label:
                return opt
        raise KeyError(f"Unknown option {label!r} in pane {self.header!r}")


class FacetGrid:
    def __init__(
        self,
        table_id: str,
        columns: Sequence[str],
        panes: Iterable[FacetPane] = (),
        sort_keys: Optional[Mapping[int, SortKey]] = None,
        row_class: Optional[Callable[[Row], str]] = None,
    ) -> None:
        self.table_id = table_id
        self.columns: List[str] = list(columns)
        self.panes: List[FacetPane] = list(panes)
        for pane in self.panes:
            if not 0 <= pane.column < len(self.columns):
                raise ValueError(f"Pane {pane.header!r} targets missing column {pane.column}")
        self.sort_keys: Dict[int, SortKey] = dict(sort_keys or {})
        self.row_class = row_class or (lambda row: DEFAULT_ROW_CLASS)
        self._rows: List[Row] = []
        self.drawn = False

    @property
    def rows(self) -> List[Row]:
        return list(self._rows)

    def add_row(self, row: Sequence[str]) -> None:
        if len(row) != len(self.columns):
            raise ValueError(
                f"Row has {len(row)} cells, table {self.table_id!r} has {len(self.columns)} columns"
            )
        self._rows.append(tuple("" if cell is None else str(cell) for cell in row))
        self.drawn = False

    def draw(self) -> None:
        self.drawn = True

    def pane(self, column: int) -> FacetPane:
        for pane in self.panes:
            if pane.column == column:
                return pane
        raise KeyError(f"No facet pane on column {column}")

    def rebuild_pane(self, column: int) -> FacetPane:
        """Recount how many rows each option of the pane on `column` matches."""
        pane = self.pane(column)
        pane.counts = {opt.label: sum(1 for row in self._rows if opt.matches(row)) for opt in pane.options}
        return pane

    def rebuild_panes(self) -> None:
        for pane in self.panes:
            self.rebuild_pane(pane.column)

    def select(self, selections: Optional[Mapping[int, Iterable[str]]] = None, search: str = "") -> List[Row]:
        """Rows passing every pane with a selection (options OR-ed within a pane)
        and containing `search` in any cell, case-insensitive."""
        active: List[List[FacetOption]] = []
        for column, labels in (selections or {}).items():
            labels = list(labels)
            if labels:
                pane = self.pane(column)
                active.append([pane.option(label) for label in labels])

        needle = search.strip().casefold()
        out: List[Row] = []
        for row in self._rows:
            if not all(any(opt.matches(row) for opt in options) for options in active):
                continue
            if needle and not any(needle in cell.casefold() for cell in row):
                continue
            out.append(row)
        return out

    def sort(self, rows: Sequence[Row], column: int, descending: bool = False) -> List[Row]:
        key = self.sort_keys.get(column, natural_sort_key)
        frame = self.to_frame(rows)
        if frame.empty:
            return []
        ordered = frame.sort_values(
            by=self.columns[column],
            key=lambda series: series.map(key),
            ascending=not descending,
            kind="stable",
        )
        return list(ordered.itertuples(index=False, name=None))

    @staticmethod
    def paginate(rows: Sequence[Row], page_length: Optional[int], page: int = 1) -> List[Row]:
        if page_length is None or page_length <= 0:
            return list(rows)
        start = (max(page, 1) - 1) * page_length
        return list(rows[start:start + page_length])

    @staticmethod
    def page_count(total: int, page_length: Optional[int]) -> int:
        if page_length is None or page_length <= 0 or total == 0:
            return 1
        return (total + page_length - 1) // page_length

    def info(self, filtered: int, page_length: Optional[int], page: int = 1) -> str:
        if filtered == 0:
            text = "Showing 0 to 0 of 0 entries"
        elif page_length is None or page_length <= 0:
            text = f"Showing 1 to {filtered} of {filtered} entries"
        else:
            start = (max(page, 1) - 1) * page_length + 1
            end = min(start + page_length - 1, filtered)
            text = f"Showing {start} to {end} of {filtered} entries"
        total = len(self._rows)
        if filtered != total:
            text += f" (filtered from {total} total entries)"
        return text

    def row_classes(self, rows: Sequence[Row]) -> List[str]:
        return [self.row_class(row) for row in rows]

    def to_frame(self, rows: Optional[Sequence[Row]] = None) -> pd.DataFrame:
        data = self._rows if rows is None else rows
        return pd.DataFrame([list(row) for row in data], columns=self.columns)
