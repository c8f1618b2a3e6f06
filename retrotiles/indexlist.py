"""Doubly linked list over a fixed range of integer node ids."""

from __future__ import annotations

from collections.abc import Iterator

NONE = -1


class IndexList:
    """Ordered, doubly linked list of node ids in ``range(num_nodes)``.

    ``-1`` stands for "no node" in links and in :attr:`first`/:attr:`last`.
    """

    def __init__(self, num_nodes: int) -> None:
        if num_nodes < 0:
            raise ValueError("num_nodes must not be negative")
        self.num_nodes = num_nodes
        self._prev = [NONE] * num_nodes
        self._next = [NONE] * num_nodes
        self.first = NONE
        self.last = NONE

    def _check(self, num: int) -> None:
        if not 0 <= num < self.num_nodes:
            raise IndexError(f"node {num} out of range")

    def link(self, num1: int, num2: int) -> None:
        """Make ``num2`` follow ``num1``; either may be -1."""
        if num1 != NONE:
            self._check(num1)
            self._next[num1] = num2
        if num2 != NONE:
            self._check(num2)
            self._prev[num2] = num1

    def unlink(self, num: int) -> None:
        """Remove a node from the list, joining its neighbours."""
        self._check(num)
        prev, nxt = self._prev[num], self._next[num]
        if prev != NONE:
            self._next[prev] = nxt
        if nxt != NONE:
            self._prev[nxt] = prev
        if self.first == num:
            self.first = nxt
        if self.last == num:
            self.last = prev
        self._prev[num] = NONE
        self._next[num] = NONE

    def append(self, num: int) -> None:
        """Add a node at the end of the list."""
        self._check(num)
        if self.first == NONE:
            self.first = num
        self.link(self.last, num)
        self.last = num

    def prev(self, num: int) -> int:
        self._check(num)
        return self._prev[num]

    def next(self, num: int) -> int:
        self._check(num)
        return self._next[num]

    def __iter__(self) -> Iterator[int]:
        index = self.first
        visited = 0
        while index != NONE:
            yield index
            visited += 1
            if visited > self.num_nodes:
                raise RuntimeError("list links form a cycle")
            index = self._next[index]