"""Selection-mode state machine decoupled from any UI toolkit.

Gallery, collection detail and collections list all share the same
behavior: long-press enters selection with one item, taps toggle
membership, emptying the selection or cancelling returns to browsing, and
a bulk action always ends back in browsing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


class SelectionMode(Enum):
    BROWSING = "browsing"
    SELECTING = "selecting"


class SelectionService:
    """Track selected ids for one view.

    Ids are kept in the order they were selected so bulk actions and
    "N selected" labels reflect user order.
    """

    def __init__(self) -> None:
        self._selected: list[str] = []

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.SELECTING if self._selected else SelectionMode.BROWSING

    @property
    def is_selecting(self) -> bool:
        return self.mode is SelectionMode.SELECTING

    @property
    def selected_ids(self) -> list[str]:
        return list(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selected

    def long_press(self, item_id: str) -> None:
        """Enter selection with only `item_id` selected.

        A long-press while already selecting restarts the selection from
        that item.
        """
        self._selected = [item_id]

    def tap(self, item_id: str) -> bool:
        """Toggle `item_id` while selecting.

        Returns:
            True if the tap was consumed by selection mode; False when
            browsing, in which case the caller opens the item instead.
        """
        if not self._selected:
            return False
        if item_id in self._selected:
            self._selected.remove(item_id)
        else:
            self._selected.append(item_id)
        return True

    def cancel(self) -> None:
        self._selected = []

    async def run_bulk_action(self, action: Callable[[set[str]], Awaitable[T]]) -> T:
        """Run `action` on the selected ids and return to browsing afterwards.

        The selection is cleared whether the action succeeds or raises.
        """
        ids = set(self._selected)
        try:
            return await action(ids)
        finally:
            self.cancel()
