"""Bill analysis models produced by the classification step."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from civicpulse.models.bill import Bill


class Recommendation(str, Enum):
    """Inferred alignment between a bill and the user's positions."""

    SUPPORT = "support"
    OPPOSE = "oppose"
    ENGAGE = "engage"

    @property
    def priority(self) -> int:
        """Ranking weight; higher sorts first."""
        return _PRIORITY[self]


_PRIORITY = {
    Recommendation.SUPPORT: 3,
    Recommendation.OPPOSE: 2,
    Recommendation.ENGAGE: 1,
}


class BillAnalysis(BaseModel):
    """Recommendation for one bill under one preference set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bill_id: str = Field(alias="billId", min_length=1)
    recommendation: Recommendation
    confidence: float = 0.0
    summary: str = ""
    relevant_issues: list[str] = Field(default_factory=list, alias="relevantIssues")
    reasoning: str = ""

    @field_validator("confidence")
    @classmethod
    def clamp_confidence(cls, value: float) -> float:
        return min(1.0, max(0.0, value))

    def to_api(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class AnalyzedBill(BaseModel):
    """A bill joined with its analysis."""

    model_config = ConfigDict(frozen=True)

    bill: Bill
    analysis: BillAnalysis

    @property
    def recommendation(self) -> Recommendation:
        return self.analysis.recommendation

    def to_api(self) -> dict:
        return {
            "bill": self.bill.to_api(),
            "analysis": self.analysis.to_api(),
            "status": self.bill.status,
        }
