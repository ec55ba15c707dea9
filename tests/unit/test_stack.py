"""
Ordered stack tests
"""

import pytest

from syncer.core.errors import DuplicateId
from syncer.core.record import OperationRecord
from syncer.core.stack import OrderedStack


def make_record(id: int) -> OperationRecord:
    return OperationRecord(id=id, handle=object())


class TestOrderedStack:
    """Tests for OrderedStack"""

    def test_pending_in_id_order(self):
        stack = OrderedStack()
        for id in (3, 1, 2):
            stack.place(id, make_record(id))
        assert [record.id for record in stack.pending()] == [1, 2, 3]
        assert len(stack) == 3

    def test_place_occupied_slot(self):
        stack = OrderedStack()
        stack.place(1, make_record(1))
        with pytest.raises(DuplicateId) as exc_info:
            stack.place(1, make_record(1))
        assert exc_info.value.id == 1

    def test_clear_leaves_tombstone(self):
        stack = OrderedStack()
        for id in (1, 2, 3):
            stack.place(id, make_record(id))

        stack.clear(2)

        assert [record.id for record in stack.pending()] == [1, 3]
        slots = [(id, record is None) for id, record in stack.slots()]
        assert slots == [(1, False), (2, True), (3, False)]
        assert stack.tombstones == 1
        assert len(stack) == 2

    def test_clear_is_idempotent(self):
        stack = OrderedStack()
        stack.place(1, make_record(1))
        stack.clear(1)
        stack.clear(1)
        stack.clear(99)
        assert stack.tombstones == 1
        assert list(stack.pending()) == []

    def test_place_over_tombstone(self):
        stack = OrderedStack()
        stack.place(1, make_record(1))
        stack.clear(1)
        stack.place(1, make_record(1))
        assert stack.tombstones == 0
        assert len(stack) == 1

    def test_pending_is_recomputed_per_call(self):
        stack = OrderedStack()
        stack.place(1, make_record(1))
        first = list(stack.pending())
        stack.place(2, make_record(2))
        second = list(stack.pending())
        assert len(first) == 1
        assert len(second) == 2

    def test_compact(self):
        stack = OrderedStack()
        for id in (1, 2, 3, 4):
            stack.place(id, make_record(id))
        stack.clear(1)
        stack.clear(3)

        assert stack.compact() == 2
        assert stack.tombstones == 0
        assert [id for id, _ in stack.slots()] == [2, 4]
        assert stack.compact() == 0
