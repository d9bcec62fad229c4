from __future__ import annotations

from typing import Dict, List

import pytest

MACHINE_COLUMNS = ["device_name", "power_status", "uptime_percent", "machine_category", "timestamp"]
WIP_COLUMNS = ["wo_num", "part_num", "description", "customer", "qty_tbr", "yield", "due", "timestamp"]
WO_COLUMNS = [
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
]


def _records(columns: List[str], rows: List[List[str]]) -> List[Dict[str, str]]:
    out = [dict(zip(columns, row)) for row in rows]
    out.append({col: "" for col in columns})  # trailer
    return out


@pytest.fixture
def machine_dataset() -> List[Dict[str, str]]:
    return _records(
        MACHINE_COLUMNS,
        [
            ["L1", "2", "91.5", "Lathes", "2024-05-01 07:30"],
            ["MT1", "1", "40", "Millturn", "2024-05-01 07:30"],
            ["M4-1", "0", "12", "Mill4ax", "2024-05-01 07:30"],
            ["M5-1", "2", "88", "Mill5ax", "2024-05-01 07:30"],
            ["G1", "1", "55", "Grinding", "2024-05-01 07:30"],
            ["L2", "2", "77", "Lathes", "2024-05-01 07:30"],
            ["", "2", "0", "Lathes", "2024-05-01 07:30"],
            ["X1", "2", "50", "Welding", "2024-05-01 07:30"],
        ],
    )


@pytest.fixture
def wip_dataset() -> List[Dict[str, str]]:
    return _records(
        WIP_COLUMNS,
        [
            ["1050", "P-100", "Bracket", "Acme", "1,200", "1,000", "2024-06-01", "2024-05-01 07:30"],
            ["1999", "P-200", "Shaft", "Globex", "300", "250", "2024-06-05", "2024-05-01 07:30"],
            ["2010", "P-100", "Bracket", "Acme", "50", "40", "2024-06-09", "2024-05-01 07:30"],
            ["3075", "P-300", "Housing", "Initech", "1,200", "900", "2024-07-01", "2024-05-01 07:30"],
        ],
    )


@pytest.fixture
def work_order_dataset() -> List[Dict[str, str]]:
    return _records(
        WO_COLUMNS,
        [
            ["5010", "2", "P-1", "Gear", "10", "2023-04-02", "3/4", "False", "", "", "2024-05-01 07:30"],
            ["5020", "1", "P-2", "Pin", "5", "No Completion Confirmation", "1/10", "True", "2", "2024-02-10T18:00:00", "2024-05-01 07:30"],
            ["5030", "0", "P-3", "Nut", "7", "2022-11-30", "2/2", "True", "4", "No Completion Confirmation", "2024-05-01 07:30"],
            ["6040", "2", "P-4", "Cap", "1", "2024-01-15", "1/2", "False", "", "", "2024-05-01 07:30"],
            ["6050", "1", "P-5", "Rod", "3", "2023-09-09", "oops", "True", "1", "2023-09-09", "2024-05-01 07:30"],
        ],
    )
