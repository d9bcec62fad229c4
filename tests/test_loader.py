from __future__ import annotations

import pytest
import requests

from shopfloor.data import loader
from shopfloor.data.loader import FetchError, ParseError, fetch_dataset, missing_columns, parse_dataset


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


def test_parse_dataset_keeps_strings_and_appends_trailer():
    text = "wo_num,part_num,qty_tbr\n1050,007,\"1,200\"\n2075,NA,\n"
    records = parse_dataset(text)

    assert records == [
        {"wo_num": "1050", "part_num": "007", "qty_tbr": "1,200"},
        {"wo_num": "2075", "part_num": "NA", "qty_tbr": ""},
        {"wo_num": "", "part_num": "", "qty_tbr": ""},
    ]


def test_parse_dataset_without_final_newline_has_no_trailer():
    records = parse_dataset("wo_num,part_num\n1050,P-1")
    assert records == [{"wo_num": "1050", "part_num": "P-1"}]


def test_parse_dataset_ignores_trailing_delimiter():
    records = parse_dataset("wo_num,part_num\n1050,P-1,\n2075,P-2,\n")

    assert records[0] == {"wo_num": "1050", "part_num": "P-1"}
    assert records[1] == {"wo_num": "2075", "part_num": "P-2"}
    assert records[-1] == {"wo_num": "", "part_num": ""}


def test_parse_dataset_rejects_overlong_rows():
    with pytest.raises(ParseError, match="Malformed"):
        parse_dataset("wo_num,part_num\n1050,P-1\n2075,P-2,x,y\n")


@pytest.mark.parametrize("text", ["", "   \n"])
def test_parse_dataset_rejects_empty_documents(text):
    with pytest.raises(ParseError):
        parse_dataset(text)


def test_fetch_dataset_parses_body(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse("device_name,timestamp\nL1,2024-05-01\n")

    monkeypatch.setattr(loader.requests, "get", fake_get)
    records = fetch_dataset("http://example.test/machines.csv", timeout=5)

    assert calls == [("http://example.test/machines.csv", 5)]
    assert records[0] == {"device_name": "L1", "timestamp": "2024-05-01"}
    assert len(records) == 2


def test_fetch_dataset_raises_on_http_error(monkeypatch):
    monkeypatch.setattr(loader.requests, "get", lambda url, timeout: FakeResponse("nope", 404))

    with pytest.raises(FetchError, match="404") as excinfo:
        fetch_dataset("http://example.test/missing.csv")
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_fetch_dataset_raises_on_network_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(loader.requests, "get", fake_get)

    with pytest.raises(FetchError, match="Could not reach"):
        fetch_dataset("http://example.test/down.csv")


def test_missing_columns_reports_absent_header_fields():
    dataset = [{"wo_num": "1", "part_num": "A"}]
    assert missing_columns(dataset, ["wo_num", "customer", "due"]) == ["customer", "due"]
    assert missing_columns([], ["wo_num"]) == ["wo_num"]
