from __future__ import annotations

from typing import Any, Dict, Iterable, NamedTuple, Tuple


class Page(NamedTuple):
    items: list
    exhausted: bool


class PaginationCursor:
    """Reveals an already computed, ordered result set one page at a time.

    The offset only moves forward. Use ``reset`` when the selection behind
    the results changes; old and new results are never merged.
    """

    def __init__(self, items: Iterable = (), shown: int = 0):
        self._items: Tuple = tuple(items)
        self._shown = max(0, min(int(shown), len(self._items)))

    @property
    def shown(self) -> int:
        return self._shown

    @property
    def total(self) -> int:
        return len(self._items)

    @property
    def exhausted(self) -> bool:
        return self._shown >= len(self._items)

    def next_page(self, page_size: int) -> Page:
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        items = list(self._items[self._shown:self._shown + page_size])
        self._shown += len(items)
        return Page(items, self.exhausted)

    def reset(self, items: Iterable = ()) -> None:
        self._items = tuple(items)
        self._shown = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"items": list(self._items), "shown": self._shown}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginationCursor":
        return cls(data.get("items", ()), data.get("shown", 0))
