"""Persistent stack of questions.

Pushing or popping builds one new cell on top of the existing ones, so old
stacks stay valid and share everything below their top.
"""

from __future__ import annotations

from typing import Iterable, Iterator


class QuestionStack:
    """Immutable singly linked list; ``push`` / ``first`` / ``rest`` are O(1)."""

    def __init__(self) -> None:
        self._first = None
        self._rest: QuestionStack | None = None
        self._size = 0

    @classmethod
    def of(cls, items: Iterable) -> QuestionStack:
        """Stack holding ``items`` with the first item on top."""
        stack = EMPTY
        for item in reversed(tuple(items)):
            stack = stack.push(item)
        return stack

    def push(self, item) -> QuestionStack:
        cell = QuestionStack.__new__(QuestionStack)
        cell._first = item
        cell._rest = self
        cell._size = self._size + 1
        return cell

    @property
    def first(self):
        if not self._size:
            raise IndexError("first of an empty stack")
        return self._first

    @property
    def rest(self) -> QuestionStack:
        if not self._size:
            raise IndexError("rest of an empty stack")
        return self._rest

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator:
        node = self
        while node._size:
            yield node._first
            node = node._rest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuestionStack):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"QuestionStack({list(self)!r})"


EMPTY = QuestionStack()
