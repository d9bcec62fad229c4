from __future__ import annotations

from typing import List, Sequence

import streamlit as st

from shopfloor.data.classify import Record, keyed_records
from shopfloor.data.facets import distinct_facets, range_facets, threshold_facets
from shopfloor.data.grid import FacetGrid, FacetPane
from shopfloor.ui.components.kpi import KpiCard, render_kpi_cards
from shopfloor.ui.components.tables import render_facet_grid
from shopfloor.ui.components.timestamp import render_timestamp
from shopfloor.ui.pages.context import PageContext
from shopfloor.ui.pages.helpers import load_page_dataset, safe_sum
from shopfloor.utils.log import get_logger

logger = get_logger(__name__)

WIP_COLUMNS = [
    "Work Order",
    "Part Number",
    "Description",
    "Customer",
    "Outstanding Qty",
    "Yield Qty",
    "Qty Due",
]
WIP_FIELDS = ["wo_num", "part_num", "description", "customer", "qty_tbr", "yield", "due"]


def create_wip_grid(dataset: Sequence[Record]) -> FacetGrid:
    panes = [
        FacetPane(0, "Work Order Range", range_facets(dataset, "wo_num", 0)),
        FacetPane(1, "Part Number", distinct_facets(dataset, "part_num", 1)),
        FacetPane(3, "Customer", distinct_facets(dataset, "customer", 3)),
        FacetPane(4, "Outstanding Qty Greater Than", threshold_facets(dataset, "qty_tbr", 4)),
    ]
    return FacetGrid("WIPTable", WIP_COLUMNS, panes)


def wip_row(record: Record) -> List[str]:
    return [record.get(f, "") for f in WIP_FIELDS]


def add_wip_rows(dataset: Sequence[Record], grid: FacetGrid) -> int:
    records = keyed_records(dataset, "wo_num")
    for record in records:
        grid.add_row(wip_row(record))
    return len(records)


def build_wip_grid(dataset: Sequence[Record]) -> FacetGrid:
    grid = create_wip_grid(dataset)
    added = add_wip_rows(dataset, grid)
    grid.draw()
    grid.rebuild_panes()
    logger.info("WIP grid built with %d rows", added)
    return grid


def render(context: PageContext) -> None:
    st.subheader(context.page.label)
    timestamp_slot = st.empty()

    dataset = load_page_dataset(context)
    if dataset is None:
        return

    grid = build_wip_grid(dataset)
    render_kpi_cards(
        [
            KpiCard(label="Open Work Orders", value=len(grid.rows)),
            KpiCard(label="Outstanding Qty", value=safe_sum(grid.to_frame()["Outstanding Qty"])),
            KpiCard(label="Customers", value=len({row[3] for row in grid.rows})),
        ],
        columns=3,
    )
    render_facet_grid(grid, key="wip", export_name="wip_report")
    render_timestamp(timestamp_slot, dataset)
