from __future__ import annotations

import html
from typing import Mapping, Optional, Sequence

import streamlit as st

TIMESTAMP_PREFIX = "Last updated: "


def timestamp_text(record: Mapping[str, str]) -> str:
    return TIMESTAMP_PREFIX + str(record.get("timestamp", ""))


def render_timestamp(slot, dataset: Sequence[Mapping[str, str]]) -> Optional[str]:
    """Replace whatever `slot` (an `st.empty()` placeholder) shows with the
    first record's timestamp. Returns the text written, if any."""
    slot.empty()
    if not dataset:
        return None
    text = timestamp_text(dataset[0])
    with slot.container():
        st.markdown(f'<div class="last-updated">{html.escape(text)}</div>', unsafe_allow_html=True)
    return text