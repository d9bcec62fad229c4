"""
Machine tiles: one coloured cell per machine showing its name and uptime.
"""

from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

from shopfloor.data.classify import MachineTile

TILE_CLASSES = {
    "on": "machine-on",
    "idle": "machine-idle",
    "off": "machine-off",
}


def tile_html(tile: MachineTile) -> str:
    css = TILE_CLASSES.get(tile.state, "machine-off")
    return (
        f'<div class="machine-tile {css}">'
        f"{html.escape(tile.name)}<br>{html.escape(tile.uptime)}%</div>"
    )


def render_tiles(tiles: Sequence[MachineTile], columns: int = 6) -> None:
    if not tiles:
        st.caption("No machines reporting.")
        return
    columns = max(columns, 1)
    for idx in range(0, len(tiles), columns):
        row_tiles = tiles[idx: idx + columns]
        cols = st.columns(columns)
        for col, tile in zip(cols, row_tiles):
            with col:
                st.markdown(tile_html(tile), unsafe_allow_html=True)
