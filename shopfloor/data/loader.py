from __future__ import annotations

import io
from typing import Dict, Iterable, List

import pandas as pd
import requests
import streamlit as st

from shopfloor.config import CACHE_TTL_SECONDS, FETCH_TIMEOUT_SECONDS, DataSource, source_url
from shopfloor.utils.log import get_logger

Record = Dict[str, str]

logger = get_logger(__name__)


class DatasetError(RuntimeError):
    """Base class for failures while loading a CSV snapshot."""


class FetchError(DatasetError):
    """The snapshot could not be retrieved (network failure or non-2xx status)."""


class ParseError(DatasetError):
    """The snapshot body is not a usable CSV document."""


def _trailer(columns: Iterable[str]) -> Record:
    return {col: "" for col in columns}


def parse_dataset(text: str) -> List[Record]:
    """Parse CSV text into an ordered list of string records keyed by the header row.

    Every value stays a string; blank cells read as "". Snapshot exports end
    with a line terminator, which yields a blank trailer record at the end of
    the list, the same way the browser-side CSV parser behaved. Range facets
    rely on it by taking their upper bound from the second-to-last record.
    A trailing delimiter on data rows never shifts values off their header.
    """
    if not text or not text.strip():
        raise ParseError("CSV document is empty")
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            index_col=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ParseError(f"Malformed CSV document: {exc}") from exc

    df = df.fillna("")
    records: List[Record] = [
        {str(k): str(v) for k, v in rec.items()} for rec in df.to_dict(orient="records")
    ]
    if text.endswith(("\n", "\r")):
        records.append(_trailer(df.columns))
    return records


def fetch_dataset(url: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> List[Record]:
    """GET `url` and parse the body as a CSV snapshot."""
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "error"
        raise FetchError(f"{url} answered HTTP {status}") from exc
    except requests.RequestException as exc:
        raise FetchError(f"Could not reach {url}: {exc}") from exc

    records = parse_dataset(response.text)
    logger.info("Parsed %d records from %s", len(records), url)
    return records


def missing_columns(dataset: List[Record], required: Iterable[str]) -> List[str]:
    """Return the required columns absent from the dataset header, in the order given."""
    present = set(dataset[0].keys()) if dataset else set()
    return [col for col in required if col not in present]


def load_dataset(source: DataSource) -> List[Record]:
    """Wrapper that resolves the source URL and calls the cached implementation."""
    return _load_dataset_impl(source_url(source), FETCH_TIMEOUT_SECONDS)


def clear_cache() -> None:
    _load_dataset_impl.clear()  # type: ignore[attr-defined]


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_dataset_impl(url: str, timeout: int) -> List[Record]:
    """Fetch one snapshot. Cached by url and timeout so widget reruns reuse it."""
    return fetch_dataset(url, timeout)
