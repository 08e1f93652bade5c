"""Classification orchestrator: cache partitioning, batching, merge and ranking."""

import logging
from typing import Iterable, Protocol, Sequence

from civicpulse.models.analysis import AnalyzedBill, BillAnalysis
from civicpulse.models.bill import Bill
from civicpulse.models.preference import UserPreference
from civicpulse.services.fingerprint import fingerprint
from civicpulse.services.result_cache import LocalResultCache

logger = logging.getLogger(__name__)

# Cost-control limit on bills per classification request
MAX_BATCH_SIZE = 20


class BillClassifier(Protocol):
    async def analyze_bills(
        self, bills: list[Bill], preferences: list[UserPreference]
    ) -> list[BillAnalysis]: ...


def rank(items: Iterable[AnalyzedBill]) -> list[AnalyzedBill]:
    """Order by recommendation priority, then confidence, both descending.

    sorted() is stable, so ties keep their input order.
    """
    return sorted(
        items,
        key=lambda item: (-item.analysis.recommendation.priority, -item.analysis.confidence),
    )


def batched(bills: Sequence[Bill], size: int) -> list[list[Bill]]:
    return [list(bills[i:i + size]) for i in range(0, len(bills), size)]


class ClassificationOrchestrator:
    """Classify bills against a preference set, reusing cached analyses.

    Analyses are cached per (bill id, preference fingerprint). Only bills
    without a valid cached analysis are sent to the classifier, in
    sequential batches of at most batch_size bills.
    """

    def __init__(
        self,
        cache: LocalResultCache,
        classifier: BillClassifier,
        batch_size: int = MAX_BATCH_SIZE,
    ):
        if not 0 < batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self.cache = cache
        self.classifier = classifier
        self.batch_size = batch_size

    async def classify(
        self, bills: Sequence[Bill], preferences: Iterable[UserPreference]
    ) -> list[AnalyzedBill]:
        """Return ranked (bill, analysis) pairs.

        Bills the classifier returns no analysis for are left out of the
        result. A classifier failure propagates; nothing is retried.

        Raises:
            ExternalCallFailure: If a classification request fails
            MalformedResponse: If a classification response can't be parsed
        """
        preferences = list(preferences)
        if not bills or not preferences:
            return []

        prefs_hash = fingerprint(preferences)

        analyses: dict[str, BillAnalysis] = {}
        uncached: list[Bill] = []
        seen: set[str] = set()

        for bill in bills:
            if bill.id in seen:
                continue
            seen.add(bill.id)

            cached = self.cache.get_analysis(bill.id, prefs_hash)
            if cached:
                analyses[bill.id] = cached
            else:
                uncached.append(bill)

        logger.info(
            "Cache hit: %d bills, need to analyze: %d bills", len(analyses), len(uncached)
        )

        for batch in batched(uncached, self.batch_size):
            fresh = await self._classify_batch(batch, preferences)
            for bill_id, analysis in fresh.items():
                self.cache.set_analysis(bill_id, prefs_hash, analysis)
            analyses.update(fresh)

        combined = [
            AnalyzedBill(bill=bill, analysis=analyses[bill.id])
            for bill in bills
            if bill.id in analyses
        ]
        # Duplicate input bills collapse to their first occurrence
        unique: dict[str, AnalyzedBill] = {}
        for item in combined:
            unique.setdefault(item.bill.id, item)

        return rank(unique.values())

    async def _classify_batch(
        self, batch: list[Bill], preferences: list[UserPreference]
    ) -> dict[str, BillAnalysis]:
        """Classify one batch, keyed by bill id.

        Duplicate ids in the response: the last one wins. Ids that were
        not submitted in this batch are ignored.
        """
        submitted = {bill.id for bill in batch}
        returned = await self.classifier.analyze_bills(batch, preferences)

        fresh: dict[str, BillAnalysis] = {}
        for analysis in returned:
            if analysis.bill_id not in submitted:
                logger.debug("Ignoring analysis for unsubmitted bill %s", analysis.bill_id)
                continue
            fresh[analysis.bill_id] = analysis

        missing = submitted - fresh.keys()
        if missing:
            logger.warning("No analysis returned for %d of %d bills", len(missing), len(batch))

        return fresh
