"""Domain models."""

from civicpulse.models.issue import IssueCategory, PolicyIssue
from civicpulse.models.preference import PreferenceSet, UserPreference
from civicpulse.models.bill import Bill, BillAction, BillAbstract, BillSponsorship
from civicpulse.models.analysis import AnalyzedBill, BillAnalysis, Recommendation
from civicpulse.models.representative import Representative
from civicpulse.models.cache_record import CacheRecord

__all__ = [
    "IssueCategory",
    "PolicyIssue",
    "PreferenceSet",
    "UserPreference",
    "Bill",
    "BillAction",
    "BillAbstract",
    "BillSponsorship",
    "AnalyzedBill",
    "BillAnalysis",
    "Recommendation",
    "Representative",
    "CacheRecord",
]
