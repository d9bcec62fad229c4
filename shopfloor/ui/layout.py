"""
Layout helpers for the Streamlit application (page setup, sidebar, styling).
"""

from __future__ import annotations

from typing import Sequence

import streamlit as st

from shopfloor.config import PageConfig


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="Shop Floor Dashboards",
        layout="wide",
        page_icon=":factory:",
    )
    _inject_dashboard_styles()


def sidebar_navigation(pages: Sequence[PageConfig]) -> PageConfig:
    st.sidebar.title("Shop Floor")
    labels = [page.label for page in pages]
    choice = st.sidebar.radio("Dashboard", labels, key="sf_page_choice")
    return pages[labels.index(choice)]


def _inject_dashboard_styles() -> None:
    """Colours for machine tiles and the last-updated banner.

    Tile classes mirror the machine power states: on (green), idle (amber),
    off (red).
    """
    st.markdown(
        """
        <style>
        .machine-tile {
            border: 1px solid #212529;
            font-size: 1.5rem;
            text-align: center;
            padding: 0.5rem 0.25rem;
            margin-bottom: 0.5rem;
        }
        .machine-on { background-color: #4caf50; color: #ffffff; }
        .machine-idle { background-color: #ffc107; color: #212529; }
        .machine-off { background-color: #e53935; color: #ffffff; }
        .last-updated {
            font-size: 1.25rem;
            text-align: center;
            margin: 0.5rem auto;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
