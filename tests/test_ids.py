"""Tests for tasktracker.tasks.ids — identifier allocation strategies."""

from __future__ import annotations

import pytest

from tasktracker.tasks.ids import (
    ALLOCATOR_NAMES,
    get_allocator,
    next_id_by_sequence,
    next_id_by_size,
)
from tasktracker.tasks.model import TaskCollection


def _coll(make_task, ids, last_id=0):
    return TaskCollection(tasks={i: make_task(i) for i in ids}, last_id=last_id)


class TestSizeAllocator:

    def test_empty_collection_starts_at_one(self):
        assert next_id_by_size(TaskCollection()) == 1

    def test_dense_ids(self, make_task):
        assert next_id_by_size(_coll(make_task, [1, 2, 3])) == 4

    def test_collides_after_deletion(self, make_task):
        """{1, 2, 3} minus 2 has size 2, so the next id is the live id 3."""
        coll = _coll(make_task, [1, 3], last_id=3)
        assert next_id_by_size(coll) == 3
        assert 3 in coll


class TestSequenceAllocator:

    def test_empty_collection_starts_at_one(self):
        assert next_id_by_sequence(TaskCollection()) == 1

    def test_skips_past_gaps(self, make_task):
        assert next_id_by_sequence(_coll(make_task, [1, 3])) == 4

    def test_never_reuses_deleted_highest_id(self, make_task):
        coll = _coll(make_task, [1], last_id=5)
        assert next_id_by_sequence(coll) == 6


class TestRegistry:

    def test_names(self):
        assert ALLOCATOR_NAMES == ("sequence", "size")

    def test_lookup(self):
        assert get_allocator("sequence") is next_id_by_sequence
        assert get_allocator("size") is next_id_by_size

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown id strategy"):
            get_allocator("uuid")
