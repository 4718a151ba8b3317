# preview/markdown/postprocessors/list_tracker.py
"""
Bounded record of the lists that are open at the current scan position.

Each slot holds whether the list at that depth is ordered (<ol>) or
unordered (<ul>). The tracker never grows past its capacity: pushing a list
while full overwrites the top-most slot, and popping an empty tracker does
nothing. Converter output with pathological nesting or stray closing tags
therefore degrades to a best-effort classification instead of an error.
"""

from typing import List, Optional

DEFAULT_CAPACITY = 20


class ListNestingTracker:
    """Stack of open list kinds, ``True`` for ordered and ``False`` for unordered."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        self._slots: List[bool] = [False] * capacity
        self._depth = -1

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def push(self, is_ordered: bool) -> None:
        # Clamp so the new entry lands in the last slot
        if self._depth + 1 >= self.capacity:
            self._depth = self.capacity - 2
        self._depth += 1
        self._slots[self._depth] = is_ordered

    def pop(self) -> None:
        if self._depth >= 0:
            self._depth -= 1

    def top(self) -> Optional[bool]:
        if self._depth < 0:
            return None
        return self._slots[self._depth]

    def depth(self) -> int:
        """Index of the innermost open list, -1 when no list is open."""
        return self._depth

    def in_unordered_list(self) -> bool:
        return self.top() is False

    def __repr__(self):
        open_lists = ["ol" if ordered else "ul" for ordered in self._slots[: self._depth + 1]]
        return f"ListNestingTracker({'>'.join(open_lists) or 'empty'})"
