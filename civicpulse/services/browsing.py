"""Browsing state machine for the one-bill-at-a-time view."""

import asyncio
from enum import Enum
from typing import Iterable, Optional

from civicpulse.models.analysis import AnalyzedBill

# Horizontal drag distance, in pixels, below which a swipe is ignored
MIN_SWIPE_DISTANCE = 50

# Seconds the slide animation runs before the index moves
TRANSITION_DELAY = 0.3


class BrowsingFilter(str, Enum):
    """Filter tabs over the ranked bill list."""

    ALL = "all"
    SUPPORT = "support"
    OPPOSE = "oppose"
    ENGAGE = "engage"


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class BrowsingState:
    """Current filter and index into the filtered bill list.

    Navigation is ignored while a transition is in flight, so overlapping
    next/previous calls can't apply out of order. Changing the filter or
    replacing the list cancels the effect of an in-flight transition.
    """

    def __init__(
        self,
        items: Iterable[AnalyzedBill] = (),
        filter: BrowsingFilter | str = BrowsingFilter.ALL,
        index: int = 0,
        transition_delay: float = TRANSITION_DELAY,
    ):
        self.items: list[AnalyzedBill] = list(items)
        # The initial filter and index are taken as given, not reset
        self.filter = BrowsingFilter(filter)
        self.current_index = index
        self.transition_delay = transition_delay
        self.direction: Optional[SwipeDirection] = None
        self.is_animating = False
        self._generation = 0
        self._clamp()

    @property
    def filtered(self) -> list[AnalyzedBill]:
        if self.filter == BrowsingFilter.ALL:
            return list(self.items)
        return [item for item in self.items if item.recommendation.value == self.filter.value]

    @property
    def current(self) -> Optional[AnalyzedBill]:
        filtered = self.filtered
        if not filtered:
            return None
        return filtered[self.current_index]

    def counts(self) -> dict[str, int]:
        """Number of bills under each filter tab."""
        counts = {f.value: 0 for f in BrowsingFilter}
        counts[BrowsingFilter.ALL.value] = len(self.items)
        for item in self.items:
            counts[item.recommendation.value] += 1
        return counts

    def set_filter(self, filter: BrowsingFilter | str) -> None:
        """Switch tabs; picking a different tab resets the index to 0."""
        filter = BrowsingFilter(filter)
        if filter == self.filter:
            return
        self.filter = filter
        self.current_index = 0
        self._generation += 1

    def replace(self, items: Iterable[AnalyzedBill]) -> None:
        """Swap in a new ranked list, keeping the index in range."""
        self.items = list(items)
        self._generation += 1
        self._clamp()

    async def next(self) -> bool:
        """Advance one bill. Returns False if navigation was a no-op."""
        if self.is_animating or self.current_index >= len(self.filtered) - 1:
            return False
        return await self._transition(1, SwipeDirection.LEFT)

    async def previous(self) -> bool:
        """Go back one bill. Returns False if navigation was a no-op."""
        if self.is_animating or self.current_index <= 0:
            return False
        return await self._transition(-1, SwipeDirection.RIGHT)

    async def swipe(self, start_x: float, end_x: float) -> bool:
        """Map a horizontal drag to navigation.

        Dragging left (start_x > end_x) goes to the next bill, dragging
        right to the previous one; drags of MIN_SWIPE_DISTANCE or less
        are ignored.
        """
        distance = start_x - end_x
        if abs(distance) <= MIN_SWIPE_DISTANCE:
            return False
        if distance > 0:
            return await self.next()
        return await self.previous()

    async def _transition(self, step: int, direction: SwipeDirection) -> bool:
        self.is_animating = True
        self.direction = direction
        generation = self._generation
        target = self.current_index + step
        try:
            await asyncio.sleep(self.transition_delay)
            if generation != self._generation:
                return False
            self.current_index = target
            return True
        finally:
            self.direction = None
            self.is_animating = False

    def _clamp(self) -> None:
        size = len(self.filtered)
        if size == 0:
            self.current_index = 0
        else:
            self.current_index = min(max(self.current_index, 0), size - 1)

    def to_api(self) -> dict:
        current = self.current
        return {
            "filter": self.filter.value,
            "currentIndex": self.current_index,
            "total": len(self.filtered),
            "counts": self.counts(),
            "direction": self.direction.value if self.direction else None,
            "isAnimating": self.is_animating,
            "current": current.to_api() if current else None,
        }
