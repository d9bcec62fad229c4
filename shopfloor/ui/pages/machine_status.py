from __future__ import annotations

from dataclasses import asdict
from typing import Dict, List, Sequence

import pandas as pd
import streamlit as st

from shopfloor.config import MACHINE_TILE_COLUMNS
from shopfloor.data.classify import (
    BUCKET_LABELS,
    MACHINE_IDLE,
    MACHINE_OFF,
    MACHINE_ON,
    MachineTile,
    Record,
    route_machines,
)
from shopfloor.ui.components.kpi import KpiCard, render_kpi_cards
from shopfloor.ui.components.tiles import render_tiles
from shopfloor.ui.components.timestamp import render_timestamp
from shopfloor.ui.pages.context import PageContext
from shopfloor.ui.pages.helpers import load_page_dataset, safe_mean
from shopfloor.utils.log import get_logger

logger = get_logger(__name__)

VIEW_BY_PAGE: Dict[str, str] = {
    "machines_all": "all",
    "machines_lathes_millturn": "lathes_millturn",
    "machines_mill_4_5ax": "mill_4_5ax",
    "machines_grinding": "grinding",
}


def build_machine_buckets(dataset: Sequence[Record], view: str) -> Dict[str, List[MachineTile]]:
    buckets = route_machines(dataset, view)
    logger.debug(
        "Routed %d machines for view %s",
        sum(len(tiles) for tiles in buckets.values()),
        view,
    )
    return buckets


def tiles_frame(buckets: Dict[str, List[MachineTile]]) -> pd.DataFrame:
    rows = [dict(asdict(tile), bucket=bucket) for bucket, tiles in buckets.items() for tile in tiles]
    return pd.DataFrame(rows, columns=["bucket", "name", "uptime", "state"])


def _status_cards(buckets: Dict[str, List[MachineTile]]) -> List[KpiCard]:
    frame = tiles_frame(buckets)
    states = frame["state"].value_counts()
    return [
        KpiCard(label="Running", value=int(states.get(MACHINE_ON, 0))),
        KpiCard(label="Idle", value=int(states.get(MACHINE_IDLE, 0))),
        KpiCard(label="Off", value=int(states.get(MACHINE_OFF, 0))),
        KpiCard(
            label="Mean Uptime",
            value=safe_mean(frame["uptime"]),
            decimals=1,
            percent=True,
            help_text="Average uptime of the machines shown on this page",
        ),
    ]


def render(context: PageContext) -> None:
    st.subheader(context.page.label)
    timestamp_slot = st.empty()

    dataset = load_page_dataset(context)
    if dataset is None:
        return

    view = VIEW_BY_PAGE.get(context.page.key, "all")
    buckets = build_machine_buckets(dataset, view)

    render_kpi_cards(_status_cards(buckets), columns=4)
    for bucket, tiles in buckets.items():
        st.markdown(f"#### {BUCKET_LABELS.get(bucket, bucket)}")
        render_tiles(tiles, columns=MACHINE_TILE_COLUMNS)

    render_timestamp(timestamp_slot, dataset)
