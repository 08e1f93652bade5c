"""Builders for bills, analyses and a controllable clock."""

from typing import Optional

from civicpulse.models.analysis import AnalyzedBill, BillAnalysis, Recommendation
from civicpulse.models.bill import Bill

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock the tests move by hand."""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_bill(
    bill_id: str,
    identifier: Optional[str] = None,
    action: Optional[str] = None,
    **extra,
) -> Bill:
    data = {
        "id": bill_id,
        "identifier": identifier or bill_id.upper(),
        "title": f"An act relating to {bill_id}",
        **extra,
    }
    if action:
        data["actions"] = [{"description": action, "classification": [action], "order": 1}]
    return Bill.model_validate(data)


def make_analysis(
    bill_id: str,
    recommendation: str = "support",
    confidence: float = 0.5,
) -> BillAnalysis:
    return BillAnalysis(
        bill_id=bill_id,
        recommendation=Recommendation(recommendation),
        confidence=confidence,
        summary=f"Summary of {bill_id}",
        relevant_issues=["rent-control"],
        reasoning="Matches the user's stated position",
    )


def make_analyzed(bill_id: str, recommendation: str = "support", confidence: float = 0.5) -> AnalyzedBill:
    return AnalyzedBill(
        bill=make_bill(bill_id),
        analysis=make_analysis(bill_id, recommendation, confidence),
    )
