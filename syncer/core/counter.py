"""
Id source

Lazily advanced tick counter that hands out operation ids
"""

import itertools
from typing import Iterator


class IdSource:
    """
    Infinite sequence of strictly increasing ids starting at 1

    Every call to next() consumes one tick. Instances are independent:
    a fresh source always restarts at 1.
    """

    def __init__(self):
        self._ticks = itertools.count(1)
        self._current = 0

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        self._current = next(self._ticks)
        return self._current

    def next(self) -> int:
        """Advance one tick and return the new id"""
        return next(self)

    @property
    def current(self) -> int:
        """Last issued id, 0 before the first tick"""
        return self._current
