"""
Row classification: route snapshot records into the display buckets of a page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

from shopfloor.data.facets import to_number
from shopfloor.utils.log import get_logger

Record = Mapping[str, str]

logger = get_logger(__name__)

MACHINE_CATEGORY_FIELD = "machine_category"
MACHINE_KEY_FIELD = "device_name"

# Category value -> container, per machine view. Buckets render in this order.
MACHINE_VIEWS: Dict[str, Dict[str, str]] = {
    "all": {
        "Lathes": "lathes",
        "Millturn": "millturn",
        "Mill4ax": "mill4ax",
        "Mill5ax": "mill5ax",
        "Grinding": "grinding",
    },
    "lathes_millturn": {
        "Lathes": "lathes",
        "Millturn": "millturn",
    },
    "mill_4_5ax": {
        "Mill4ax": "mill4ax",
        "Mill5ax": "mill5ax",
    },
    "grinding": {
        "Grinding": "grinding",
    },
}

BUCKET_LABELS: Dict[str, str] = {
    "lathes": "Lathes",
    "millturn": "Millturn",
    "mill4ax": "Mill 4-Axis",
    "mill5ax": "Mill 5-Axis",
    "grinding": "Grinding",
}

QUALITY_ROUTES: Dict[str, str] = {"2": "In Quality", "1": "Tentative"}
MRB_ROUTES: Dict[str, str] = {"True": "MRB"}

MACHINE_ON = "on"
MACHINE_IDLE = "idle"
MACHINE_OFF = "off"


@dataclass(frozen=True)
class MachineTile:
    name: str
    uptime: str
    state: str


def is_blank(value) -> bool:
    return value is None or str(value) == ""


def classify(
    dataset: Sequence[Record],
    field: str,
    routes: Mapping[str, str],
    key_field: str,
) -> Iterator[Tuple[str, Record]]:
    """Yield (bucket, record) in dataset order.

    Records whose `field` value is not a route key, or whose `key_field` is
    blank (trailer rows), are dropped.
    """
    dropped = 0
    for record in dataset:
        bucket = routes.get(record.get(field, ""))
        if bucket is None or is_blank(record.get(key_field)):
            dropped += 1
            continue
        yield bucket, record
    if dropped:
        logger.debug("Dropped %d of %d records while classifying on %s", dropped, len(dataset), field)


def route(
    dataset: Sequence[Record],
    field: str,
    routes: Mapping[str, str],
    key_field: str,
) -> Dict[str, List[Record]]:
    buckets: Dict[str, List[Record]] = {bucket: [] for bucket in routes.values()}
    for bucket, record in classify(dataset, field, routes, key_field):
        buckets[bucket].append(record)
    return buckets


def keyed_records(dataset: Sequence[Record], key_field: str) -> List[Record]:
    """Records with a non-blank key, in dataset order."""
    return [record for record in dataset if not is_blank(record.get(key_field))]


def machine_state(record: Record) -> str:
    status = to_number(record.get("power_status"))
    if status == 2:
        return MACHINE_ON
    if status == 1:
        return MACHINE_IDLE
    return MACHINE_OFF


def machine_tile(record: Record) -> MachineTile:
    return MachineTile(
        name=record.get(MACHINE_KEY_FIELD, ""),
        uptime=record.get("uptime_percent", ""),
        state=machine_state(record),
    )


def route_machines(dataset: Sequence[Record], view: str) -> Dict[str, List[MachineTile]]:
    """Machine tiles grouped by container for one of the MACHINE_VIEWS."""
    if view not in MACHINE_VIEWS:
        raise KeyError(f"Unknown machine view: {view}")
    buckets = route(dataset, MACHINE_CATEGORY_FIELD, MACHINE_VIEWS[view], MACHINE_KEY_FIELD)
    return {bucket: [machine_tile(rec) for rec in records] for bucket, records in buckets.items()}
