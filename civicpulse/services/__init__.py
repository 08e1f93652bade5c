"""Service clients and the recommendation pipeline."""

from civicpulse.services.openstates import openstates_client
from civicpulse.services.claude import claude_client
from civicpulse.services.result_cache import LocalResultCache, get_result_cache
from civicpulse.services.classification import ClassificationOrchestrator
from civicpulse.services.scripts import ScriptOrchestrator
from civicpulse.services.browsing import BrowsingState
from civicpulse.services.session import BillFeed, CivicSession

__all__ = [
    "openstates_client",
    "claude_client",
    "LocalResultCache",
    "get_result_cache",
    "ClassificationOrchestrator",
    "ScriptOrchestrator",
    "BrowsingState",
    "BillFeed",
    "CivicSession",
]
