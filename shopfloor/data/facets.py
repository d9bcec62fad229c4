"""
Facet option builders for the search panes shown above each work-order grid.

Each builder scans the full dataset and returns an ordered list of
`FacetOption`. Predicates receive a rendered grid row (a positional sequence
of cell strings), so the `column` passed here must match the column order
used when rows are added to the grid.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

Record = Mapping[str, str]
Row = Sequence[str]

RANGE_WIDTH = 1000
NO_CONFIRMATION = "No Completion Confirmation"

_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")


@dataclass(frozen=True)
class FacetOption:
    label: str
    predicate: Callable[[Row], bool]

    def matches(self, row: Row) -> bool:
        try:
            return bool(self.predicate(row))
        except IndexError:
            return False


def to_number(value) -> Optional[float]:
    """Lenient numeric conversion: thousands separators stripped, blank or invalid -> None."""
    if value is None:
        return None
    text = str(value).replace(",", "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number


def _has_key(record: Record, key_field: str) -> bool:
    return str(record.get(key_field) or "") != ""


def _distinct(dataset: Sequence[Record], field: str, key_field: str) -> List[str]:
    seen = set()
    values: List[str] = []
    for record in dataset:
        if not _has_key(record, key_field):
            continue
        value = record.get(field, "")
        if value in seen:
            continue
        seen.add(value)
        values.append(value)
    return values


def _in_range(column: int, start: int, width: int) -> Callable[[Row], bool]:
    def predicate(row: Row) -> bool:
        value = to_number(row[column])
        return value is not None and start <= value < start + width

    return predicate


def _equals(column: int, expected: str) -> Callable[[Row], bool]:
    def predicate(row: Row) -> bool:
        return row[column] == expected

    return predicate


def _contains(column: int, fragment: str) -> Callable[[Row], bool]:
    def predicate(row: Row) -> bool:
        return fragment in row[column]

    return predicate


def _greater_than(column: int, threshold: Optional[float]) -> Callable[[Row], bool]:
    def predicate(row: Row) -> bool:
        value = to_number(row[column])
        return threshold is not None and value is not None and value > threshold

    return predicate


def range_facets(
    dataset: Sequence[Record],
    field: str,
    column: int,
    width: int = RANGE_WIDTH,
) -> List[FacetOption]:
    """Consecutive `width`-wide buckets from the first record's value to the
    second-to-last record's value (the last one is the trailer row)."""
    if len(dataset) < 2:
        return []
    first = to_number(dataset[0].get(field))
    last = to_number(dataset[-2].get(field))
    if first is None or last is None:
        return []
    low = math.floor(first / width) * width
    high = math.floor(last / width) * width
    return [
        FacetOption(label=str(bucket), predicate=_in_range(column, bucket, width))
        for bucket in range(low, high + 1, width)
    ]


def distinct_facets(
    dataset: Sequence[Record],
    field: str,
    column: int,
    key_field: str = "wo_num",
) -> List[FacetOption]:
    return [
        FacetOption(label=value, predicate=_equals(column, value))
        for value in _distinct(dataset, field, key_field)
    ]


def threshold_facets(
    dataset: Sequence[Record],
    field: str,
    column: int,
    key_field: str = "wo_num",
) -> List[FacetOption]:
    """One "greater than" option per distinct value of `field`."""
    return [
        FacetOption(label=value, predicate=_greater_than(column, to_number(value)))
        for value in _distinct(dataset, field, key_field)
    ]


def year_facets(
    dataset: Sequence[Record],
    field: str,
    column: int,
    key_field: str = "wo_num",
    none_label: str = NO_CONFIRMATION,
) -> List[FacetOption]:
    options = [FacetOption(label=none_label, predicate=_equals(column, none_label))]
    seen = set()
    for value in _distinct(dataset, field, key_field):
        for year in _YEAR_RE.findall(value):
            if year in seen:
                continue
            seen.add(year)
            options.append(FacetOption(label=year, predicate=_contains(column, year)))
    return options


def fixed_facets(labels: Iterable[str], column: int) -> List[FacetOption]:
    return [FacetOption(label=label, predicate=_equals(column, label)) for label in labels]
