from __future__ import annotations

import json

import pytest

from zen_den.core.constants import RECENT_STAFF_KEY
from zen_den.staff.recent import RecentStaffStore


def test_empty_slot_reads_as_empty_list():
    assert RecentStaffStore({}).names() == []


@pytest.mark.parametrize("raw", ["not json", "{\"a\": 1}", "42", 17])
def test_corrupt_slot_reads_as_empty_list(raw):
    assert RecentStaffStore({RECENT_STAFF_KEY: raw}).names() == []


def test_remember_puts_name_first_and_persists_json():
    slot: dict = {}
    store = RecentStaffStore(slot)

    store.remember("J. Smith")
    store.remember("Ms. Rivera")

    assert store.names() == ["Ms. Rivera", "J. Smith"]
    assert json.loads(slot[RECENT_STAFF_KEY]) == ["Ms. Rivera", "J. Smith"]


def test_re_adding_moves_to_front_case_insensitively():
    store = RecentStaffStore({})
    for name in ["A", "B", "C"]:
        store.remember(name)

    result = store.remember("b")

    assert result == ["b", "C", "A"]


def test_list_is_capped_at_ten():
    store = RecentStaffStore({})
    for i in range(15):
        store.remember(f"Staff {i}")

    names = store.names()
    assert len(names) == 10
    assert names[0] == "Staff 14"
    assert names[-1] == "Staff 5"
    assert len({n.lower() for n in names}) == len(names)


def test_blank_name_is_ignored():
    store = RecentStaffStore({})
    store.remember("A")
    assert store.remember("   ") == ["A"]


def test_non_string_entries_are_dropped():
    store = RecentStaffStore({RECENT_STAFF_KEY: json.dumps(["A", 3, None, "B"])})
    assert store.names() == ["A", "B"]
