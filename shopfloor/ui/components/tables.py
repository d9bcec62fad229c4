"""
Reusable helpers for rendering facet grids with consistent configuration.
"""

from __future__ import annotations

import io
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from shopfloor.data.grid import PAGE_LENGTHS, FacetGrid, FacetPane

ROW_STYLES: Dict[str, str] = {
    "confident": "background-color: #d1e7dd;",
    "tentative": "background-color: #fff3cd;",
}


def _page_length_label(length: Optional[int]) -> str:
    return "All" if length is None else str(length)


def _pane_multiselect(pane: FacetPane, key: str) -> List[str]:
    counts = pane.counts
    return st.multiselect(
        label=pane.header,
        options=[opt.label for opt in pane.options],
        default=[],
        key=f"{key}_pane_{pane.column}",
        format_func=lambda v: f"{v} ({int(counts.get(v, 0))})",
    )


def excel_bytes(frame: pd.DataFrame, sheet_name: str) -> bytes:
    bio = io.BytesIO()
    with pd.ExcelWriter(bio, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    return bio.getvalue()


def _styled(frame: pd.DataFrame, classes: List[str]):
    if frame.empty:
        return frame
    styles = [ROW_STYLES.get(cls, "") for cls in classes]

    def _row_style(row: pd.Series) -> List[str]:
        return [styles[row.name]] * len(row)

    return frame.style.apply(_row_style, axis=1)


def render_facet_grid(
    grid: FacetGrid,
    key: str,
    height: int = 600,
    export_name: str = "export",
) -> None:
    if not grid.drawn:
        grid.draw()
        grid.rebuild_panes()

    selections: Dict[int, List[str]] = {}
    if grid.panes:
        pane_cols = st.columns(len(grid.panes))
        for col, pane in zip(pane_cols, grid.panes):
            with col:
                known = {opt.label for opt in pane.options}
                selections[pane.column] = [v for v in _pane_multiselect(pane, key) if v in known]

    col_length, col_sort, col_order, col_search = st.columns([1, 2, 1, 2])
    with col_length:
        page_length = st.selectbox(
            "Show entries",
            options=PAGE_LENGTHS,
            index=len(PAGE_LENGTHS) - 1,
            format_func=_page_length_label,
            key=f"{key}_length",
        )
    with col_sort:
        sort_column = st.selectbox(
            "Sort by",
            options=[None] + list(range(len(grid.columns))),
            index=0,
            format_func=lambda idx: "Snapshot order" if idx is None else grid.columns[idx],
            key=f"{key}_sort",
        )
    with col_order:
        descending = st.toggle("Descending", value=False, key=f"{key}_desc")
    with col_search:
        search = st.text_input("Search", key=f"{key}_search")

    rows = grid.select(selections, search)
    if sort_column is not None:
        rows = grid.sort(rows, sort_column, descending)

    page = 1
    pages = grid.page_count(len(rows), page_length)
    if pages > 1:
        page = int(
            st.number_input("Page", min_value=1, max_value=pages, value=1, step=1, key=f"{key}_page_{pages}")
        )
    shown = grid.paginate(rows, page_length, page)

    if not shown:
        st.info("No matching records found.")
    else:
        frame = grid.to_frame(shown)
        st.dataframe(
            _styled(frame, grid.row_classes(shown)),
            use_container_width=True,
            height=height,
            hide_index=True,
        )
    st.caption(grid.info(len(rows), page_length, page))

    export = grid.to_frame(rows)
    col_csv, col_xlsx, _ = st.columns([1, 1, 4])
    with col_csv:
        st.download_button(
            "Download CSV",
            data=export.to_csv(index=False).encode("utf-8"),
            file_name=f"{export_name}.csv",
            mime="text/csv",
            key=f"{key}_download",
        )
    with col_xlsx:
        st.download_button(
            "Download Excel",
            data=excel_bytes(export, grid.table_id),
            file_name=f"{export_name}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key=f"{key}_download_xlsx",
        )
