"""Open States v3 API client for bill and legislator data."""

import logging
import re
from datetime import date, timedelta
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from civicpulse.config import get_settings
from civicpulse.data.zip_coordinates import coordinates_for_zip
from civicpulse.exceptions import (
    ConfigurationMissing,
    ExternalCallFailure,
    MalformedResponse,
    ValidationFailure,
)
from civicpulse.models.bill import Bill
from civicpulse.models.representative import Representative

logger = logging.getLogger(__name__)

settings = get_settings()

# Included with every bill search so classification has text to work with
BILL_SEARCH_INCLUDES = ["abstracts", "sponsorships", "actions"]
BILL_DETAIL_INCLUDES = ["abstracts", "sponsorships", "actions", "votes", "versions", "documents"]

RECENT_ACTIVITY_DAYS = 30

_ZIP_PATTERN = re.compile(r"^\d{5}$")


def validate_zip_code(zip_code: Optional[str]) -> str:
    """Return the trimmed zip code, or raise if it isn't five digits."""
    cleaned = (zip_code or "").strip()
    if not _ZIP_PATTERN.match(cleaned):
        raise ValidationFailure("Please enter a valid 5-digit zip code")
    return cleaned


def parse_bills(payload: dict) -> list[Bill]:
    """Parse the results of a bill search, skipping records without an id."""
    results = payload.get("results")
    if not isinstance(results, list):
        raise MalformedResponse("Open States bill search returned no results list")

    bills = []
    for record in results:
        try:
            bills.append(Bill.model_validate(record))
        except ValidationError:
            logger.warning("Skipping unparseable bill record: %r", str(record)[:120])
    return bills


class OpenStatesAPIClient:
    """Client for the Open States v3 API."""

    def __init__(self):
        self.base_url = settings.open_states_api_base_url
        self.api_key = settings.open_states_api_key
        self.jurisdiction = settings.jurisdiction

    def _get_headers(self) -> dict:
        return {"X-API-KEY": self.api_key, "Content-Type": "application/json"}

    async def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> dict:
        """GET an endpoint and decode the JSON body.

        None-valued params are dropped; list values become repeated params.

        Raises:
            ConfigurationMissing: If no API key is configured
            ExternalCallFailure: On network errors or non-success status
            MalformedResponse: If the body is not a JSON object
        """
        if not self.api_key:
            raise ConfigurationMissing(
                "OPEN_STATES_API_KEY is not set. Get one at https://openstates.org/accounts/register/"
            )

        query = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}{endpoint}",
                    headers=self._get_headers(),
                    params=query,
                    timeout=30.0,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Open States API error on %s: %s", endpoint, e.response.status_code)
            raise ExternalCallFailure(
                f"Open States API error: {e.response.status_code} - {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Open States request to %s failed", endpoint, exc_info=True)
            raise ExternalCallFailure(f"Open States request failed: {e}") from e
        except ValueError as e:
            raise MalformedResponse(f"Open States returned invalid JSON for {endpoint}") from e

        if not isinstance(data, dict):
            raise MalformedResponse(f"Open States returned an unexpected payload for {endpoint}")
        return data

    async def search_bills(
        self,
        page: int = 1,
        per_page: int = 20,
        q: Optional[str] = None,
        session: Optional[str] = None,
        subject: Optional[list[str]] = None,
        updated_since: Optional[str] = None,
        action_since: Optional[str] = None,
    ) -> dict:
        """Search bills in the configured jurisdiction.

        Args:
            page: 1-based page number
            per_page: Results per page
            q: Free-text search
            session: Legislative session identifier
            subject: Subject filters (any number)
            updated_since: ISO date; only bills updated since
            action_since: ISO date; only bills with an action since

        Returns:
            Raw response with "results" and "pagination"
        """
        params: dict[str, Any] = {
            "jurisdiction": self.jurisdiction,
            "page": page,
            "per_page": per_page,
            "include": BILL_SEARCH_INCLUDES,
            "q": q,
            "session": session,
            "updated_since": updated_since,
            "action_since": action_since,
        }
        if subject:
            params["subject"] = list(subject)

        return await self._get("/bills", params)

    async def fetch_recent_bills(self, per_page: int = 20) -> list[Bill]:
        """Get bills with legislative action in the last 30 days."""
        since = date.today() - timedelta(days=RECENT_ACTIVITY_DAYS)
        payload = await self.search_bills(per_page=per_page, action_since=since.isoformat())
        return parse_bills(payload)

    async def get_bill(self, bill_id: str) -> dict:
        """Get one bill by its Open States id, with votes and versions."""
        uuid = bill_id.removeprefix("ocd-bill/")
        return await self._get(f"/bills/ocd-bill/{uuid}", {"include": BILL_DETAIL_INCLUDES})

    async def get_people_by_location(self, lat: float, lng: float) -> dict:
        """Get legislators whose districts contain the point."""
        return await self._get("/people.geo", {"lat": lat, "lng": lng})

    async def fetch_representatives(self, zip_code: str) -> dict:
        """Resolve a zip code to the state legislators who represent it.

        Unknown zip codes fall back to a default point. Results are limited
        to the configured jurisdiction and to people currently in office.

        Returns:
            Dict with "results" (Representative list), "coordinates", "zipCode"
        """
        zip_code = validate_zip_code(zip_code)
        lat, lng = coordinates_for_zip(zip_code)

        payload = await self.get_people_by_location(lat, lng)
        people = payload.get("results")
        if not isinstance(people, list):
            raise MalformedResponse("Open States people lookup returned no results list")

        representatives = []
        for person in people:
            try:
                rep = Representative.model_validate(person)
            except ValidationError:
                logger.warning("Skipping unparseable person record")
                continue
            if rep.current_role is None:
                continue
            if rep.jurisdiction is None or rep.jurisdiction.name != self.jurisdiction:
                continue
            representatives.append(rep)

        return {
            "results": representatives,
            "coordinates": {"lat": lat, "lng": lng},
            "zipCode": zip_code,
        }


openstates_client = OpenStatesAPIClient()
