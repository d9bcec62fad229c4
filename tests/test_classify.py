from __future__ import annotations

import pytest

from shopfloor.data.classify import (
    MACHINE_VIEWS,
    QUALITY_ROUTES,
    MachineTile,
    classify,
    keyed_records,
    machine_state,
    route,
    route_machines,
)


@pytest.mark.parametrize("view", sorted(MACHINE_VIEWS))
def test_bucket_sizes_match_category_and_key_counts(machine_dataset, view):
    buckets = route_machines(machine_dataset, view)

    for category, bucket in MACHINE_VIEWS[view].items():
        expected = sum(
            1
            for rec in machine_dataset
            if rec["machine_category"] == category and rec["device_name"] != ""
        )
        assert len(buckets[bucket]) == expected


def test_blank_device_name_is_dropped():
    dataset = [{"device_name": "", "power_status": "2", "machine_category": "Lathes"}]
    assert route_machines(dataset, "all")["lathes"] == []


def test_grinding_machine_routes_only_to_grinding_views():
    dataset = [{"device_name": "M1", "power_status": "1", "machine_category": "Grinding", "uptime_percent": "61"}]
    tile = MachineTile(name="M1", uptime="61", state="idle")

    assert route_machines(dataset, "grinding") == {"grinding": [tile]}
    assert route_machines(dataset, "all")["grinding"] == [tile]
    assert route_machines(dataset, "lathes_millturn") == {"lathes": [], "millturn": []}


def test_each_record_lands_in_at_most_one_bucket(machine_dataset):
    buckets = route_machines(machine_dataset, "all")
    names = [tile.name for tiles in buckets.values() for tile in tiles]
    assert len(names) == len(set(names))
    assert "X1" not in names


def test_route_keeps_dataset_order_within_bucket(machine_dataset):
    buckets = route_machines(machine_dataset, "lathes_millturn")
    assert [tile.name for tile in buckets["lathes"]] == ["L1", "L2"]
    assert list(buckets) == ["lathes", "millturn"]


def test_unknown_view_raises(machine_dataset):
    with pytest.raises(KeyError):
        route_machines(machine_dataset, "welding")


@pytest.mark.parametrize(
    "status, expected",
    [("2", "on"), ("2.0", "on"), (" 1 ", "idle"), ("0", "off"), ("", "off"), ("unknown", "off")],
)
def test_machine_state(status, expected):
    assert machine_state({"power_status": status}) == expected


def test_classify_yields_in_dataset_order(work_order_dataset):
    result = [(status, rec["wo_num"]) for status, rec in classify(work_order_dataset, "in_quality", QUALITY_ROUTES, "wo_num")]
    assert result == [
        ("In Quality", "5010"),
        ("Tentative", "5020"),
        ("In Quality", "6040"),
        ("Tentative", "6050"),
    ]


def test_route_skips_blank_keys_even_when_category_matches():
    dataset = [
        {"wo_num": "", "mrb": "True"},
        {"wo_num": "7", "mrb": "True"},
        {"wo_num": "8", "mrb": "true"},
    ]
    assert route(dataset, "mrb", {"True": "MRB"}, "wo_num") == {"MRB": [{"wo_num": "7", "mrb": "True"}]}


def test_keyed_records_excludes_trailer(wip_dataset):
    assert [rec["wo_num"] for rec in keyed_records(wip_dataset, "wo_num")] == ["1050", "1999", "2010", "3075"]
