"""Single-user session: zip code, preferences, bill feed and call flow."""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from civicpulse.exceptions import CivicPulseError, ValidationFailure
from civicpulse.models.analysis import AnalyzedBill
from civicpulse.models.bill import Bill
from civicpulse.models.preference import PreferenceSet, UserPreference
from civicpulse.models.representative import Representative
from civicpulse.services.browsing import TRANSITION_DELAY, BrowsingState
from civicpulse.services.classification import ClassificationOrchestrator
from civicpulse.services.openstates import validate_zip_code
from civicpulse.services.scripts import ScriptOrchestrator, format_script

logger = logging.getLogger(__name__)

BillFetcher = Callable[[], Awaitable[list[Bill]]]
RepresentativeLookup = Callable[[str], Awaitable[dict]]


class FeedState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ANALYZING = "analyzing"
    READY = "ready"
    ERROR = "error"


class BillFeed:
    """Fetch and classify bills; only the most recent load may publish.

    Every load takes a new sequence number. A load that finishes after a
    newer one started is discarded, along with its errors.
    """

    def __init__(self, fetch_bills: BillFetcher, classifier: ClassificationOrchestrator):
        self.fetch_bills = fetch_bills
        self.classifier = classifier
        self.state = FeedState.IDLE
        self.error: Optional[str] = None
        self.items: list[AnalyzedBill] = []
        self._sequence = 0

    def _is_current(self, request_id: int) -> bool:
        return request_id == self._sequence

    async def load(self, preferences: list[UserPreference]) -> Optional[list[AnalyzedBill]]:
        """Run fetch then classification.

        Returns:
            The ranked list, or None if a newer load superseded this one
        """
        self._sequence += 1
        request_id = self._sequence
        self.state = FeedState.LOADING
        self.error = None

        try:
            bills = await self.fetch_bills()
            if not self._is_current(request_id):
                logger.info("Discarding superseded bill fetch %d", request_id)
                return None

            self.state = FeedState.ANALYZING
            results = await self.classifier.classify(bills, preferences)
        except CivicPulseError as e:
            if not self._is_current(request_id):
                logger.info("Ignoring failure from superseded load %d: %s", request_id, e)
                return None
            self.state = FeedState.ERROR
            self.error = str(e)
            raise
        except Exception:
            if not self._is_current(request_id):
                logger.info("Ignoring failure from superseded load %d", request_id, exc_info=True)
                return None
            logger.error("Bill load %d failed", request_id, exc_info=True)
            self.state = FeedState.ERROR
            self.error = "Failed to load bills"
            raise

        if not self._is_current(request_id):
            logger.info("Discarding superseded classification %d", request_id)
            return None

        self.items = results
        self.state = FeedState.READY
        return results

    def reset(self) -> None:
        # Invalidates any in-flight load
        self._sequence += 1
        self.state = FeedState.IDLE
        self.error = None
        self.items = []


class CivicSession:
    """Everything one user does: zip, preferences, browsing and calling."""

    def __init__(
        self,
        feed: BillFeed,
        scripts: ScriptOrchestrator,
        lookup_representatives: RepresentativeLookup,
        transition_delay: float = TRANSITION_DELAY,
    ):
        self.feed = feed
        self.scripts = scripts
        self.lookup_representatives = lookup_representatives
        self.transition_delay = transition_delay
        self.zip_code: Optional[str] = None
        self.preferences = PreferenceSet()
        self.browsing = BrowsingState(transition_delay=transition_delay)
        self._representatives: Optional[list[Representative]] = None

    def set_zip_code(self, zip_code: str) -> str:
        """Store a validated zip code; representatives are looked up again."""
        self.zip_code = validate_zip_code(zip_code)
        self._representatives = None
        return self.zip_code

    def update_preferences(self, preferences: list[UserPreference]) -> None:
        for preference in preferences:
            self.preferences.update(preference)

    async def load_bills(self) -> Optional[list[AnalyzedBill]]:
        results = await self.feed.load(self.preferences.as_list())
        if results is not None:
            self.browsing.replace(results)
        return results

    async def representatives(self) -> list[Representative]:
        """Legislators for the session's zip code, fetched once per zip."""
        if self.zip_code is None:
            raise ValidationFailure("Please enter a valid 5-digit zip code")
        if self._representatives is None:
            payload = await self.lookup_representatives(self.zip_code)
            self._representatives = payload["results"]
        return self._representatives

    async def call(
        self, representative_id: Optional[str] = None, recommendation: Optional[str] = None
    ) -> dict:
        """Prepare a call about the current bill.

        Picks the requested representative, or the first one for the zip
        code, and resolves the script for the current bill.

        Raises:
            ValidationFailure: No current bill, no zip, unknown
                representative, or an engage-only recommendation
        """
        current = self.browsing.current
        if current is None:
            raise ValidationFailure("No bill selected")

        representatives = await self.representatives()
        if not representatives:
            raise ValidationFailure("No representatives found for this zip code")

        if representative_id is None:
            representative = representatives[0]
        else:
            matches = [r for r in representatives if r.id == representative_id]
            if not matches:
                raise ValidationFailure(f"Unknown representative: {representative_id}")
            representative = matches[0]

        stance = recommendation or current.recommendation.value
        script = await self.scripts.get_script(
            current.bill,
            self.preferences.as_list(),
            stance,
            self.zip_code,
            current.bill.status,
        )

        return {
            "bill": current.to_api(),
            "representative": representative.to_api(),
            "recommendation": stance,
            "script": script,
            "formattedScript": format_script(script),
        }

    def restart(self) -> None:
        """Forget zip, preferences and bills. Cached results are kept."""
        self.zip_code = None
        self.preferences.clear()
        self.feed.reset()
        self.browsing = BrowsingState(transition_delay=self.transition_delay)
        self._representatives = None

    def to_api(self) -> dict:
        return {
            "zipCode": self.zip_code,
            "preferences": [p.model_dump(by_alias=True) for p in self.preferences],
            "state": self.feed.state.value,
            "error": self.feed.error,
            "browsing": self.browsing.to_api(),
        }
