from __future__ import annotations

import pytest

from core.services.selection_service import SelectionMode, SelectionService


def test_starts_browsing() -> None:
    sel = SelectionService()
    assert sel.mode is SelectionMode.BROWSING
    assert sel.tap("x") is False


def test_long_press_then_tap_same_item_returns_to_browsing() -> None:
    sel = SelectionService()
    sel.long_press("x")
    assert sel.mode is SelectionMode.SELECTING
    assert sel.selected_ids == ["x"]

    assert sel.tap("x") is True
    assert sel.mode is SelectionMode.BROWSING


def test_tap_adds_then_cancel_clears() -> None:
    sel = SelectionService()
    sel.long_press("x")
    sel.tap("y")
    assert sel.selected_ids == ["x", "y"]
    assert sel.is_selected("y")

    sel.cancel()
    assert sel.mode is SelectionMode.BROWSING
    assert sel.count == 0


def test_long_press_while_selecting_restarts() -> None:
    sel = SelectionService()
    sel.long_press("x")
    sel.tap("y")
    sel.long_press("z")
    assert sel.selected_ids == ["z"]


async def test_bulk_action_receives_ids_and_clears() -> None:
    sel = SelectionService()
    sel.long_press("x")
    sel.tap("y")
    seen: list[set[str]] = []

    async def action(ids: set[str]) -> int:
        seen.append(ids)
        return len(ids)

    assert await sel.run_bulk_action(action) == 2
    assert seen == [{"x", "y"}]
    assert sel.mode is SelectionMode.BROWSING


async def test_bulk_action_failure_still_returns_to_browsing() -> None:
    sel = SelectionService()
    sel.long_press("x")

    async def action(ids: set[str]) -> int:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await sel.run_bulk_action(action)
    assert sel.mode is SelectionMode.BROWSING
