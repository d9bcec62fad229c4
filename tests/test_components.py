from __future__ import annotations

import io

import pandas as pd

from shopfloor.ui.components.formatting import format_number, format_percent
from shopfloor.ui.components.kpi import KpiCard, format_kpi_value
from shopfloor.ui.components.tables import excel_bytes


def test_format_number_and_percent():
    assert format_number(1200) == "1,200"
    assert format_number(2750.5, decimals=1) == "2,750.5"
    assert format_number(None) == "–"
    assert format_percent(91.5) == "91.5%"
    assert format_percent("n/a") == "–"


def test_kpi_value_respects_decimals_and_percent():
    assert format_kpi_value(KpiCard(label="Open Work Orders", value=4)) == "4"
    assert format_kpi_value(KpiCard(label="Mean Uptime", value=65.75, decimals=1, percent=True)) == "65.8%"
    assert format_kpi_value(KpiCard(label="Qty in MRB")) == "–"


def test_excel_export_holds_the_filtered_rows():
    frame = pd.DataFrame(
        [["5020", "P-2", "2024-02-10"], ["6050", "P-5", "2023-09-09"]],
        columns=["Work Order", "Part Number", "Date"],
    )
    data = excel_bytes(frame, "mrbTable")

    back = pd.read_excel(io.BytesIO(data), sheet_name="mrbTable", dtype=str)
    assert list(back.columns) == ["Work Order", "Part Number", "Date"]
    assert back["Work Order"].tolist() == ["5020", "6050"]
