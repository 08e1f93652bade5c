"""Call-script orchestrator with caching and a local fallback."""

import logging
import re
from typing import Iterable, Optional, Protocol

from civicpulse.exceptions import ValidationFailure
from civicpulse.models.analysis import Recommendation
from civicpulse.models.bill import Bill
from civicpulse.models.preference import UserPreference
from civicpulse.services.result_cache import LocalResultCache

logger = logging.getLogger(__name__)

_INTRODUCED_ASKS = {
    Recommendation.SUPPORT: "Please support this bill as it moves through the legislative process.",
    Recommendation.OPPOSE: "Please oppose this bill as it moves through the legislative process.",
}
_FLOOR_ASKS = {
    Recommendation.SUPPORT: "Please vote YES on this bill when it comes to the floor.",
    Recommendation.OPPOSE: "Please vote NO on this bill when it comes to the floor.",
}

# Bill status label -> what the caller asks the legislator to do
SPECIFIC_ASKS: dict[str, dict[Recommendation, str]] = {
    "Introduced": _INTRODUCED_ASKS,
    "Filed": _INTRODUCED_ASKS,
    "In Committee": {
        Recommendation.SUPPORT: "Please support moving this bill out of committee.",
        Recommendation.OPPOSE: "Please oppose this bill in committee and prevent it from advancing.",
    },
    "Passed Committee": _FLOOR_ASKS,
    "First Reading": _FLOOR_ASKS,
    "Second Reading": _FLOOR_ASKS,
    "Third Reading": {
        Recommendation.SUPPORT: "I urge you to vote YES on this bill, the vote is imminent.",
        Recommendation.OPPOSE: "I urge you to vote NO on this bill, the vote is imminent.",
    },
    "Passed": {
        Recommendation.SUPPORT: "Please continue to champion this bill as it moves to the other chamber.",
        Recommendation.OPPOSE: "Please work to stop this bill in the other chamber.",
    },
}

DEFAULT_ASKS: dict[Recommendation, str] = {
    Recommendation.SUPPORT: "I'm asking you to vote YES on this bill.",
    Recommendation.OPPOSE: "I'm asking you to vote NO on this bill.",
}

BOLD_PHRASES = (
    "my support",
    "my opposition",
    "I support",
    "I oppose",
    "in support of",
    "in opposition to",
    "strongly support",
    "strongly oppose",
    "vote YES",
    "vote NO",
    "urge you to support",
    "urge you to oppose",
    "asking you to support",
    "asking you to oppose",
    "please support",
    "please oppose",
    "support this bill",
    "oppose this bill",
)

# Longest first so "strongly support" wins over "support this bill" etc.
_BOLD_PATTERN = re.compile(
    "|".join(re.escape(p) for p in sorted(BOLD_PHRASES, key=len, reverse=True)),
    re.IGNORECASE,
)


class ScriptWriter(Protocol):
    async def generate_call_script(
        self,
        bill: Bill,
        preferences: list[UserPreference],
        recommendation: str,
        bill_status: Optional[str],
        specific_ask: str,
    ) -> str: ...


def callable_recommendation(recommendation: Recommendation | str) -> Recommendation:
    """Validate that a recommendation is one a caller can act on."""
    try:
        value = Recommendation(recommendation)
    except ValueError:
        value = None
    if value not in (Recommendation.SUPPORT, Recommendation.OPPOSE):
        raise ValidationFailure('recommendation must be "support" or "oppose"')
    return value


def specific_ask(status: Optional[str], recommendation: Recommendation | str) -> str:
    """The sentence asking the legislator to act, given the bill's status."""
    asks = SPECIFIC_ASKS.get(status or "", DEFAULT_ASKS)
    return asks[callable_recommendation(recommendation)]


def fallback_script(identifier: str, zip_code: str, recommendation: Recommendation | str) -> str:
    """Template script used when generation fails."""
    word = Recommendation(recommendation).value
    return (
        f"Hi, my name is [YOUR NAME] and I'm a constituent from {zip_code}. "
        f"I'm calling about {identifier}. I {word} this bill. Thank you for your time."
    )


def format_script(script: str) -> str:
    """Put each sentence on its own paragraph and bold key position phrases."""
    formatted = script.replace(". ", ".\n\n").replace("? ", "?\n\n").strip()
    return _BOLD_PATTERN.sub(lambda m: f"**{m.group(0)}**", formatted)


class ScriptOrchestrator:
    """Resolve the call script for a bill and stance."""

    def __init__(self, cache: LocalResultCache, writer: ScriptWriter):
        self.cache = cache
        self.writer = writer

    async def get_script(
        self,
        bill: Bill,
        preferences: Iterable[UserPreference],
        recommendation: Recommendation | str,
        zip_code: str,
        bill_status: Optional[str] = None,
    ) -> str:
        """Return a cached script, a freshly generated one, or the fallback.

        Generation failures never propagate; the fallback is not cached so
        the next request tries again.

        Raises:
            ValidationFailure: If recommendation is not support or oppose
        """
        stance = callable_recommendation(recommendation)

        cached = self.cache.get_script(bill.id, stance)
        if cached:
            logger.info("Using cached script for %s", bill.id)
            return cached

        status = bill_status if bill_status is not None else bill.status

        try:
            script = await self.writer.generate_call_script(
                bill,
                list(preferences),
                stance.value,
                status,
                specific_ask(status, stance),
            )
        except Exception:
            logger.warning("Failed to generate script for %s, using fallback", bill.id, exc_info=True)
            return fallback_script(bill.identifier, zip_code, stance)

        self.cache.set_script(bill.id, stance, script)
        logger.info("Cached new script for %s", bill.id)
        return script
