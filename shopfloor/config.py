"""
Application-wide configuration constants and helper utilities.

Settings resolve from the process environment first, then `st.secrets`.
`shopfloor.bootstrap_env` must be imported before this module so that `.env`
values are visible to the module-level constants below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import streamlit as st


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        pass
    return default


def _int_setting(name: str, default: int) -> int:
    raw = get_setting(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class DataSource:
    key: str
    label: str
    env_var: str
    default_url: str
    required_columns: Tuple[str, ...]


@dataclass(frozen=True)
class PageConfig:
    key: str
    label: str
    source: str


DATA_SOURCES: Dict[str, DataSource] = {
    "machine_status": DataSource(
        key="machine_status",
        label="Machine status",
        env_var="MACHINE_STATUS_CSV_URL",
        default_url="https://ryanzcode.github.io/dishon-pages/data/machine_statuses.csv",
        required_columns=(
            "device_name",
            "power_status",
            "uptime_percent",
            "machine_category",
            "timestamp",
        ),
    ),
    "wip": DataSource(
        key="wip",
        label="WIP report",
        env_var="WIP_CSV_URL",
        default_url="http://192.168.1.75/data/wip_data.csv",
        required_columns=(
            "wo_num",
            "part_num",
            "description",
            "customer",
            "qty_tbr",
            "yield",
            "due",
            "timestamp",
        ),
    ),
    "work_orders": DataSource(
        key="work_orders",
        label="Work order tracking",
        env_var="WORK_ORDER_CSV_URL",
        default_url="http://192.168.1.75/data/wo_data.csv",
        required_columns=(
            "wo_num",
            "in_quality",
            "part_num",
            "description",
            "qty",
            "date",
            "progress",
            "mrb",
            "mrb_qty",
            "mrb_date",
            "timestamp",
        ),
    ),
}


# Ordered page definitions for the sidebar navigation
PAGES: List[PageConfig] = [
    PageConfig("machines_all", "Machine Status: All", "machine_status"),
    PageConfig("machines_lathes_millturn", "Machine Status: Lathes & Millturn", "machine_status"),
    PageConfig("machines_mill_4_5ax", "Machine Status: Mill 4/5-Axis", "machine_status"),
    PageConfig("machines_grinding", "Machine Status: Grinding", "machine_status"),
    PageConfig("wip", "WIP Report", "wip"),
    PageConfig("quality", "Work Orders: Quality", "work_orders"),
    PageConfig("mrb", "Work Orders: MRB", "work_orders"),
]


def source_url(source: DataSource) -> str:
    return get_setting(source.env_var, source.default_url) or source.default_url


FETCH_TIMEOUT_SECONDS: int = _int_setting("FETCH_TIMEOUT_SECONDS", 30)
CACHE_TTL_SECONDS: int = _int_setting("CACHE_TTL_SECONDS", 60)
MACHINE_TILE_COLUMNS: int = max(_int_setting("MACHINE_TILE_COLUMNS", 6), 1)
LOG_LEVEL: str = (get_setting("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FILE: Optional[str] = get_setting("LOG_FILE")
