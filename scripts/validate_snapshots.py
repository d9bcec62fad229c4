"""Quick validation script for the configured CSV snapshots.

Run with `python scripts/validate_snapshots.py` to ensure every source is
reachable, parses, and carries the columns the dashboards read.
"""

from __future__ import annotations

import shopfloor.bootstrap_env  # noqa: F401  load .env before reading config

from shopfloor.config import DATA_SOURCES, FETCH_TIMEOUT_SECONDS, source_url
from shopfloor.data.loader import DatasetError, fetch_dataset, missing_columns


def main() -> None:
    failures = []
    for source in DATA_SOURCES.values():
        url = source_url(source)
        try:
            dataset = fetch_dataset(url, FETCH_TIMEOUT_SECONDS)
        except DatasetError as exc:
            failures.append(f"{source.key}: {exc}")
            continue

        missing = missing_columns(dataset, source.required_columns)
        if missing:
            failures.append(f"{source.key}: missing required columns {missing}")
            continue

        print(f"{source.key} validation passed. Rows: {len(dataset)}")

    if failures:
        raise SystemExit("Snapshot validation failed:\n" + "\n".join(failures))


if __name__ == "__main__":
    main()
