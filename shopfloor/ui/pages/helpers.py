from __future__ import annotations

from typing import List, Optional

import pandas as pd
import streamlit as st

from shopfloor.data.loader import DatasetError, Record, load_dataset, missing_columns
from shopfloor.ui.pages.context import PageContext
from shopfloor.utils.log import get_logger

logger = get_logger(__name__)


def load_page_dataset(context: PageContext) -> Optional[List[Record]]:
    """Fetch the page's snapshot, surfacing failures as a visible banner.

    Returns None when the page should stop rendering.
    """
    source = context.source
    try:
        with st.spinner(f"Loading {source.label.lower()} data..."):
            dataset = load_dataset(source)
    except DatasetError as exc:
        logger.exception("Loading %s failed", source.key)
        st.error(f"Failed to load {source.label.lower()} data: {exc}")
        return None

    missing = missing_columns(dataset, source.required_columns)
    if missing:
        logger.warning("%s snapshot is missing columns: %s", source.key, ", ".join(missing))
        st.warning(f"Snapshot is missing expected columns: {', '.join(missing)}")
    return dataset


def _numeric(series: pd.Series) -> pd.Series:
    # snapshot quantities carry thousands separators ("1,200")
    text = series.astype(str).str.replace(",", "", regex=False).str.strip()
    return pd.to_numeric(text, errors="coerce").dropna()


def safe_sum(series: pd.Series) -> Optional[float]:
    cleaned = _numeric(series)
    if cleaned.empty:
        return None
    return float(cleaned.sum())


def safe_mean(series: pd.Series) -> Optional[float]:
    cleaned = _numeric(series)
    if cleaned.empty:
        return None
    return float(cleaned.mean())
