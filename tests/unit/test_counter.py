"""
Id source tests
"""

import itertools

from syncer.core.counter import IdSource


class TestIdSource:
    """Tests for IdSource"""

    def test_starts_at_one(self):
        ids = IdSource()
        assert ids.current == 0
        assert ids.next() == 1
        assert ids.current == 1

    def test_strictly_increasing(self):
        ids = IdSource()
        issued = [ids.next() for _ in range(100)]
        assert issued == list(range(1, 101))

    def test_iterator_protocol(self):
        ids = IdSource()
        assert next(ids) == 1
        assert list(itertools.islice(ids, 3)) == [2, 3, 4]

    def test_instances_are_independent(self):
        first = IdSource()
        first.next()
        first.next()

        second = IdSource()
        assert second.next() == 1
        assert first.next() == 3
