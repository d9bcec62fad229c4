"""
Work order tracking: quality hold and MRB (material review board) views,
both fed by the same work order snapshot.
"""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd
import streamlit as st

from shopfloor.data.classify import MRB_ROUTES, QUALITY_ROUTES, Record, classify
from shopfloor.data.expressions import expression_sort_key
from shopfloor.data.facets import fixed_facets, range_facets, year_facets
from shopfloor.data.grid import FacetGrid, FacetPane, Row
from shopfloor.ui.components.kpi import KpiCard, render_kpi_cards
from shopfloor.ui.components.tables import render_facet_grid
from shopfloor.ui.components.timestamp import render_timestamp
from shopfloor.ui.pages.context import PageContext
from shopfloor.ui.pages.helpers import load_page_dataset, safe_sum
from shopfloor.utils.log import get_logger

logger = get_logger(__name__)

IN_QUALITY = "In Quality"
TENTATIVE = "Tentative"

QUALITY_COLUMNS = [
    "Work Order",
    "Status",
    "Part Number",
    "Description",
    "Qty in Quality",
    "Quality Completion Confirmation Date",
    "Work Order Entry Number",
]
MRB_COLUMNS = [
    "Work Order",
    "Part Number",
    "Description",
    "Qty in MRB",
    "Latest MRB Completion Confirmation Date",
]


def quality_row_class(row: Row) -> str:
    return "confident" if row[1] == IN_QUALITY else "tentative"


def create_quality_grid(dataset: Sequence[Record]) -> FacetGrid:
    panes = [
        FacetPane(0, "Work Order Range", range_facets(dataset, "wo_num", 0)),
        FacetPane(1, "Status", fixed_facets([IN_QUALITY, TENTATIVE], 1)),
        FacetPane(5, "Completion Confirmation Year", year_facets(dataset, "date", 5)),
    ]
    return FacetGrid(
        "qualityTable",
        QUALITY_COLUMNS,
        panes,
        sort_keys={6: expression_sort_key},
        row_class=quality_row_class,
    )


def quality_row(record: Record, status: str) -> List[str]:
    return [
        record.get("wo_num", ""),
        status,
        record.get("part_num", ""),
        record.get("description", ""),
        record.get("qty", ""),
        record.get("date", ""),
        record.get("progress", ""),
    ]


def add_quality_rows(dataset: Sequence[Record], grid: FacetGrid) -> int:
    added = 0
    for status, record in classify(dataset, "in_quality", QUALITY_ROUTES, "wo_num"):
        grid.add_row(quality_row(record, status))
        added += 1
    return added


def build_quality_grid(dataset: Sequence[Record]) -> FacetGrid:
    grid = create_quality_grid(dataset)
    added = add_quality_rows(dataset, grid)
    grid.draw()
    grid.rebuild_panes()
    logger.info("Quality grid built with %d rows", added)
    return grid


def mrb_date(raw: str) -> str:
    """Render an MRB confirmation date as YYYY-MM-DD (UTC); unparseable values stay as-is."""
    ts = pd.to_datetime(raw, errors="coerce")
    if pd.isna(ts):
        return raw
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return ts.strftime("%Y-%m-%d")


def create_mrb_grid(dataset: Sequence[Record]) -> FacetGrid:
    # year labels must come from the dates as they appear in the grid cells
    rendered = [dict(record, mrb_date=mrb_date(record.get("mrb_date", ""))) for record in dataset]
    panes = [
        FacetPane(0, "Work Order Range", range_facets(dataset, "wo_num", 0)),
        FacetPane(4, "Completion Confirmation Year", year_facets(rendered, "mrb_date", 4)),
    ]
    return FacetGrid("mrbTable", MRB_COLUMNS, panes)


def mrb_row(record: Record) -> List[str]:
    return [
        record.get("wo_num", ""),
        record.get("part_num", ""),
        record.get("description", ""),
        record.get("mrb_qty", ""),
        mrb_date(record.get("mrb_date", "")),
    ]


def add_mrb_rows(dataset: Sequence[Record], grid: FacetGrid) -> int:
    added = 0
    for _, record in classify(dataset, "mrb", MRB_ROUTES, "wo_num"):
        grid.add_row(mrb_row(record))
        added += 1
    return added


def build_mrb_grid(dataset: Sequence[Record]) -> FacetGrid:
    grid = create_mrb_grid(dataset)
    added = add_mrb_rows(dataset, grid)
    grid.draw()
    grid.rebuild_panes()
    logger.info("MRB grid built with %d rows", added)
    return grid


def render_quality(context: PageContext) -> None:
    st.subheader(context.page.label)
    timestamp_slot = st.empty()

    dataset = load_page_dataset(context)
    if dataset is None:
        return

    grid = build_quality_grid(dataset)
    status = grid.pane(1).counts
    render_kpi_cards(
        [
            KpiCard(label=IN_QUALITY, value=status.get(IN_QUALITY, 0)),
            KpiCard(
                label=TENTATIVE,
                value=status.get(TENTATIVE, 0),
                help_text="Work orders routed to quality without a confirmed completion",
            ),
            KpiCard(label="Qty in Quality", value=safe_sum(grid.to_frame()["Qty in Quality"])),
        ],
        columns=3,
    )
    render_facet_grid(grid, key="quality", export_name="quality_work_orders")
    render_timestamp(timestamp_slot, dataset)


def render_mrb(context: PageContext) -> None:
    st.subheader(context.page.label)
    timestamp_slot = st.empty()

    dataset = load_page_dataset(context)
    if dataset is None:
        return

    grid = build_mrb_grid(dataset)
    render_kpi_cards(
        [
            KpiCard(label="Work Orders in MRB", value=len(grid.rows)),
            KpiCard(label="Qty in MRB", value=safe_sum(grid.to_frame()["Qty in MRB"])),
        ],
        columns=2,
    )
    render_facet_grid(grid, key="mrb", export_name="mrb_work_orders")
    render_timestamp(timestamp_slot, dataset)
