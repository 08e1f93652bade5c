"""Anthropic Claude client for bill classification and call scripts."""

import json
import logging
from typing import Iterable, Optional

import anthropic
from pydantic import ValidationError

from civicpulse.config import get_settings
from civicpulse.data.issues import get_issue
from civicpulse.exceptions import ConfigurationMissing, ExternalCallFailure, MalformedResponse
from civicpulse.models.analysis import BillAnalysis
from civicpulse.models.bill import Bill
from civicpulse.models.preference import UserPreference

logger = logging.getLogger(__name__)

settings = get_settings()

ANALYZE_PROMPT = """You are analyzing {jurisdiction} state bills to help a citizen understand which bills align with their policy preferences.

## User's Policy Positions

{user_profile}

## Bills to Analyze

{bills}

## Instructions

For each bill, analyze whether the user would likely support, oppose, or want to engage further with this bill based on their stated positions.

Respond with a JSON array containing an analysis object for each bill. Each object should have:
- "billId": the bill's id field
- "recommendation": one of "support", "oppose", or "engage" (use "engage" when the bill is relevant but the user's position isn't clear, or the bill has mixed implications)
- "confidence": a number from 0 to 1 indicating how confident you are in this recommendation
- "summary": a 1-2 sentence plain-language summary of what this bill does (avoid jargon)
- "relevantIssues": array of issue IDs from the user's preferences that this bill relates to
- "reasoning": a brief (1 sentence) explanation of why you made this recommendation based on the user's positions

Important guidelines:
- Be objective and base recommendations purely on the user's stated positions
- If a bill doesn't clearly relate to any of the user's stated issues, recommend "engage" with low confidence
- Write summaries that a non-expert could understand
- Consider the bill's actual likely effects, not just its stated intent

Respond ONLY with the JSON array, no other text."""

SCRIPT_PROMPT = """Generate a brief, polite phone call script for a constituent calling their {jurisdiction} state legislator about this bill.

## Bill Information
- Identifier: {identifier}
- Title: {title}
- Abstract: {abstract}
- Current Status: {status}

## User's Position
The user wants to {recommendation} this bill.

## Specific Ask to Include
{specific_ask}

## User's Values (for context)
{user_profile}

## Instructions
Write a script that:
1. Is 3-4 sentences maximum
2. Introduces the caller as a constituent
3. States their position clearly using phrases like "I support" or "I oppose"
4. Includes the SPECIFIC ASK provided above - this is the most important part
5. Gives ONE brief reason based on the bill's actual content
6. Thanks them for their time

Use placeholders [YOUR NAME] and [YOUR ZIP CODE] where appropriate.

Respond ONLY with the script text, no other formatting or explanation."""


def build_user_profile(preferences: Iterable[UserPreference]) -> str:
    """Describe preferences as one markdown bullet per known issue."""
    lines = []

    for pref in preferences:
        issue = get_issue(pref.issue_id)
        if not issue:
            continue

        intensity = {2: "strongly", 1: "somewhat"}.get(pref.intensity, "neutral on")
        if pref.position == 0:
            position = f"Neutral on {issue.name}"
        elif pref.position > 0:
            position = f'{intensity} favors: "{issue.right_label}"'
        else:
            position = f'{intensity} favors: "{issue.left_label}"'

        lines.append(f"- **{issue.name}** (ID: {issue.id}): {position}")

    return "\n".join(lines)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_analyses(text: str) -> list[BillAnalysis]:
    """Parse a JSON array of analyses.

    Items that don't validate are dropped; an unparseable payload raises.

    Raises:
        MalformedResponse: If the text is not a JSON array
    """
    try:
        payload = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse analysis response as JSON: %s", e)
        raise MalformedResponse("Claude returned analyses that are not valid JSON") from e

    if not isinstance(payload, list):
        raise MalformedResponse("Claude returned analyses that are not a JSON array")

    analyses = []
    for item in payload:
        try:
            analyses.append(BillAnalysis.model_validate(item))
        except ValidationError:
            logger.warning("Dropping malformed analysis item: %r", str(item)[:120])
    return analyses


class ClaudeClient:
    """Language-model collaborator for the recommendation pipeline."""

    def __init__(self):
        self.api_key = settings.anthropic_api_key
        self.model = settings.anthropic_model
        self.jurisdiction = settings.jurisdiction
        self._client: Optional[anthropic.AsyncAnthropic] = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if not self.api_key:
            raise ConfigurationMissing(
                "ANTHROPIC_API_KEY is not set. Claude API key not configured."
            )
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def _complete(self, prompt: str, max_tokens: int) -> str:
        """Send a single-turn prompt and return the text response."""
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error("Claude request failed", exc_info=True)
            raise ExternalCallFailure(f"Claude request failed: {e}") from e

        for content in response.content:
            if content.type == "text":
                return content.text

        raise MalformedResponse("No text response from Claude")

    async def analyze_bills(
        self, bills: list[Bill], preferences: list[UserPreference]
    ) -> list[BillAnalysis]:
        """Classify bills against the user's positions in one request."""
        if not bills or not preferences:
            return []

        bill_summaries = [
            {
                "id": bill.id,
                "identifier": bill.identifier,
                "title": bill.title,
                "abstract": bill.abstract,
                "sponsors": bill.primary_sponsors,
                "subjects": bill.subjects,
                "latestAction": bill.latest_action_description or "",
            }
            for bill in bills
        ]

        prompt = ANALYZE_PROMPT.format(
            jurisdiction=self.jurisdiction,
            user_profile=build_user_profile(preferences),
            bills=json.dumps(bill_summaries, indent=2),
        )

        text = await self._complete(prompt, max_tokens=4096)
        return parse_analyses(text)

    async def generate_call_script(
        self,
        bill: Bill,
        preferences: list[UserPreference],
        recommendation: str,
        bill_status: Optional[str],
        specific_ask: str,
    ) -> str:
        """Write a short phone script asking the legislator to act on a bill."""
        prompt = SCRIPT_PROMPT.format(
            jurisdiction=self.jurisdiction,
            identifier=bill.identifier,
            title=bill.title,
            abstract=bill.abstract or "No abstract available",
            status=bill_status or "Unknown",
            recommendation=recommendation,
            specific_ask=specific_ask,
            user_profile=build_user_profile(preferences),
        )

        text = await self._complete(prompt, max_tokens=500)
        if not text.strip():
            raise MalformedResponse("Claude returned an empty script")
        return text


claude_client = ClaudeClient()
