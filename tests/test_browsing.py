"""Tests for the browsing state machine."""

import asyncio

import pytest

from civicpulse.services.browsing import (
    MIN_SWIPE_DISTANCE,
    BrowsingFilter,
    BrowsingState,
    SwipeDirection,
)

from factories import make_analyzed


@pytest.fixture
def items():
    return [
        make_analyzed("s1", "support", 0.9),
        make_analyzed("s2", "support", 0.8),
        make_analyzed("o1", "oppose", 0.7),
        make_analyzed("e1", "engage", 0.6),
    ]


@pytest.fixture
def state(items):
    return BrowsingState(items, transition_delay=0)


class TestFiltering:
    """Filter tabs and per-tab counts."""

    def test_all_shows_everything(self, state, items):
        """The all filter shows every bill."""
        assert state.filtered == items

    def test_filter_by_recommendation(self, state):
        """A recommendation filter keeps only matching bills."""
        state.set_filter("support")
        assert [item.bill.id for item in state.filtered] == ["s1", "s2"]

    def test_counts(self, state):
        """Tab counts cover all bills and each recommendation."""
        assert state.counts() == {"all": 4, "support": 2, "oppose": 1, "engage": 1}

    @pytest.mark.asyncio
    async def test_changing_filter_resets_index(self, state):
        """Switching filters returns to the first bill."""
        await state.next()
        state.set_filter(BrowsingFilter.SUPPORT)
        assert state.current_index == 0

    @pytest.mark.asyncio
    async def test_same_filter_keeps_index(self, state):
        """Picking the current filter again leaves the index alone."""
        await state.next()
        state.set_filter("all")
        assert state.current_index == 1

    def test_empty_filter_has_no_current(self, items):
        """A filter with no bills has no current bill."""
        state = BrowsingState(items[:2], filter="oppose", transition_delay=0)
        assert state.filtered == []
        assert state.current is None


class TestNavigation:
    """next/previous stay within bounds."""

    @pytest.mark.asyncio
    async def test_next_advances(self, state):
        """next moves to the following bill."""
        assert await state.next() is True
        assert state.current.bill.id == "s2"

    @pytest.mark.asyncio
    async def test_next_stops_at_last(self, state):
        """next does nothing on the last bill."""
        for _ in range(10):
            await state.next()
        assert state.current_index == 3
        assert await state.next() is False

    @pytest.mark.asyncio
    async def test_previous_stops_at_first(self, state):
        """previous does nothing on the first bill."""
        assert await state.previous() is False
        assert state.current_index == 0

    @pytest.mark.asyncio
    async def test_previous_goes_back(self, state):
        """previous moves to the preceding bill."""
        await state.next()
        await state.next()
        assert await state.previous() is True
        assert state.current_index == 1

    @pytest.mark.asyncio
    async def test_navigation_on_empty_list_is_noop(self):
        """Navigating an empty list changes nothing."""
        state = BrowsingState([], transition_delay=0)
        assert await state.next() is False
        assert await state.previous() is False
        assert state.current_index == 0

    def test_initial_index_is_kept(self, items):
        """A valid starting index is kept."""
        state = BrowsingState(items, index=2, transition_delay=0)
        assert state.current.bill.id == "o1"

    def test_initial_index_is_clamped(self, items):
        """An out of range starting index is clamped."""
        state = BrowsingState(items, index=99, transition_delay=0)
        assert state.current_index == 3


class TestTransitions:
    """Navigation while a transition is in flight."""

    @pytest.mark.asyncio
    async def test_flags_set_during_transition(self, items):
        """Animation flags are set while a step is pending."""
        state = BrowsingState(items, transition_delay=0.01)

        task = asyncio.create_task(state.next())
        await asyncio.sleep(0)
        assert state.is_animating is True
        assert state.direction == SwipeDirection.LEFT

        await task
        assert state.is_animating is False
        assert state.direction is None
        assert state.current_index == 1

    @pytest.mark.asyncio
    async def test_previous_animates_right(self, items):
        """Going back animates to the right."""
        state = BrowsingState(items, index=1, transition_delay=0.01)

        task = asyncio.create_task(state.previous())
        await asyncio.sleep(0)
        assert state.direction == SwipeDirection.RIGHT
        await task

    @pytest.mark.asyncio
    async def test_navigation_ignored_while_animating(self, items):
        """Steps requested mid-transition are ignored."""
        state = BrowsingState(items, transition_delay=0.01)

        first = asyncio.create_task(state.next())
        await asyncio.sleep(0)
        assert await state.next() is False
        await first

        assert state.current_index == 1

    @pytest.mark.asyncio
    async def test_filter_change_cancels_transition(self, items):
        """A filter change cancels the pending step."""
        state = BrowsingState(items, transition_delay=0.01)

        task = asyncio.create_task(state.next())
        await asyncio.sleep(0)
        state.set_filter("oppose")

        assert await task is False
        assert state.current_index == 0


class TestSwipe:
    """Horizontal drags map to navigation past a threshold."""

    @pytest.mark.asyncio
    async def test_short_drag_is_ignored(self, state):
        """Drags under the threshold do not navigate."""
        assert await state.swipe(200, 170) is False
        assert state.current_index == 0

    @pytest.mark.asyncio
    async def test_drag_at_threshold_is_ignored(self, state):
        """A drag exactly at the threshold does not navigate."""
        assert await state.swipe(200, 200 - MIN_SWIPE_DISTANCE) is False

    @pytest.mark.asyncio
    async def test_left_drag_goes_next(self, state):
        """Dragging left shows the next bill."""
        assert await state.swipe(200, 140) is True
        assert state.current_index == 1

    @pytest.mark.asyncio
    async def test_right_drag_goes_previous(self, state):
        """Dragging right shows the previous bill."""
        await state.next()
        assert await state.swipe(100, 160) is True
        assert state.current_index == 0

    @pytest.mark.asyncio
    async def test_right_drag_at_start_does_nothing(self, state):
        """Dragging right on the first bill does nothing."""
        assert await state.swipe(100, 200) is False
        assert state.current_index == 0


class TestReplace:
    """Replacing the bill list under an existing state."""

    @pytest.mark.asyncio
    async def test_replace_clamps_index(self, state, items):
        """Replacing the list clamps the index to the new length."""
        for _ in range(3):
            await state.next()
        state.replace(items[:2])
        assert state.current_index == 1

    def test_to_api(self, state):
        """Browsing state serializes with camelCase keys."""
        data = state.to_api()
        assert data["filter"] == "all"
        assert data["total"] == 4
        assert data["current"]["bill"]["id"] == "s1"
        assert data["isAnimating"] is False
