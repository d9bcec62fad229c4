"""
Display formatting for KPI values: machine counts, part quantities and uptime.
"""

from __future__ import annotations

from typing import Optional

MISSING = "–"


def format_number(value: Optional[float], decimals: int = 0) -> str:
    """Quantity with thousands separators, e.g. 1200 -> "1,200"."""
    if value is None:
        return MISSING
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return MISSING


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    """Uptime values are already percentages (91.5 -> "91.5%")."""
    if value is None:
        return MISSING
    try:
        return f"{value:.{decimals}f}%"
    except (TypeError, ValueError):
        return MISSING
