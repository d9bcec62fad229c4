from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import streamlit as st

from shopfloor.ui.components.formatting import format_number, format_percent


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    decimals: int = 0
    percent: bool = False
    help_text: Optional[str] = None


def format_kpi_value(card: KpiCard) -> str:
    if card.percent:
        return format_percent(card.value, decimals=card.decimals)
    return format_number(card.value, decimals=card.decimals)


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    """
    Render KPI cards in rows of `columns` Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=format_kpi_value(card), help=card.help_text)
