from __future__ import annotations


class Inventory:
    """Items granted by solved locks. Set semantics, insertion order kept for display."""

    def __init__(self) -> None:
        self._items: dict[str, None] = {}

    def grant(self, item: str) -> bool:
        """Add `item`. Returns False (and changes nothing) if it is already held."""

        if item in self._items:
            return False
        self._items[item] = None
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> list[str]:
        return list(self._items)
