"""Tests for grouping action step records by district."""

from collections import Counter

import pytest

from src.pipeline.action_steps.data_loader import ActionStepRecord
from src.pipeline.action_steps.partitioner import partition_by_district


def rec(district: str, step: str) -> ActionStepRecord:
    return ActionStepRecord(district, step, "", "", "", "", "")


RECORDS = [
    rec("Beta", "b1"),
    rec("Alpha", "a1"),
    rec("Beta", "b2"),
    rec("Gamma", "g1"),
    rec("Alpha", "a2"),
    rec("Beta", "b3"),
]


def test_partition_is_complete_without_duplicates():
    groups = partition_by_district(RECORDS)
    flattened = [r for group in groups.values() for r in group]
    assert Counter(flattened) == Counter(RECORDS)
    assert len(flattened) == len(RECORDS)


def test_order_within_district_follows_source():
    groups = partition_by_district(RECORDS)
    assert [r.step for r in groups["Beta"]] == ["b1", "b2", "b3"]
    assert [r.step for r in groups["Alpha"]] == ["a1", "a2"]


def test_first_seen_district_order_is_default():
    assert list(partition_by_district(RECORDS)) == ["Beta", "Alpha", "Gamma"]


def test_lexicographic_district_order():
    groups = partition_by_district(RECORDS, order="lexicographic")
    assert list(groups) == ["Alpha", "Beta", "Gamma"]
    assert [r.step for r in groups["Beta"]] == ["b1", "b2", "b3"]


def test_empty_input_gives_no_districts():
    assert partition_by_district([]) == {}


def test_grouping_is_exact_match():
    groups = partition_by_district([rec("Alpha", "1"), rec("alpha", "2"), rec("Alpha ", "3")])
    assert set(groups) == {"Alpha", "alpha", "Alpha "}


def test_unknown_order_rejected():
    with pytest.raises(ValueError):
        partition_by_district(RECORDS, order="random")
