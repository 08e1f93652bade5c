"""Proxy routes onto Open States and Claude."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from civicpulse.data.issues import ISSUE_CATEGORY_LABELS, POLICY_ISSUES
from civicpulse.exceptions import CivicPulseError, ValidationFailure
from civicpulse.models.bill import Bill
from civicpulse.models.preference import UserPreference
from civicpulse.services import claude_client, openstates_client
from civicpulse.services.classification import MAX_BATCH_SIZE
from civicpulse.services.scripts import callable_recommendation, specific_ask
from civicpulse.routers.errors import bad_request, error_response

router = APIRouter(prefix="/api", tags=["api"])


def _parse_preferences(raw: Any) -> list[UserPreference]:
    if not isinstance(raw, list):
        raise ValidationFailure("preferences array is required")
    try:
        return [UserPreference.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ValidationFailure(f"Invalid preference: {e.errors()[0]['msg']}") from e


def _parse_bill(raw: Any) -> Bill:
    try:
        return Bill.model_validate(raw)
    except ValidationError as e:
        raise ValidationFailure(f"Invalid bill: {e.errors()[0]['msg']}") from e


@router.get("/bills")
async def search_bills(
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=20),
    q: Optional[str] = Query(default=None, description="Full-text search"),
    session: Optional[str] = Query(default=None, description="Legislative session"),
    subject: list[str] = Query(default=[]),
    updated_since: Optional[str] = Query(default=None),
    action_since: Optional[str] = Query(default=None),
) -> JSONResponse:
    """Search bills in the configured jurisdiction."""
    try:
        payload = await openstates_client.search_bills(
            page=page,
            per_page=per_page,
            q=q,
            session=session,
            subject=subject,
            updated_since=updated_since,
            action_since=action_since,
        )
    except CivicPulseError as e:
        return error_response(e, "Failed to fetch bills")

    return JSONResponse(content=payload)


@router.get("/bills/{bill_id:path}")
async def get_bill(bill_id: str) -> JSONResponse:
    """Get one bill with votes, versions and documents."""
    if not bill_id:
        return bad_request("Bill ID is required")

    try:
        payload = await openstates_client.get_bill(bill_id)
    except CivicPulseError as e:
        return error_response(e, "Failed to fetch bill")

    return JSONResponse(content=payload)


@router.get("/representatives")
async def get_representatives(zip: Optional[str] = Query(default=None)) -> JSONResponse:
    """State legislators for a zip code."""
    if not zip:
        return bad_request("Zip code is required")

    try:
        result = await openstates_client.fetch_representatives(zip)
    except CivicPulseError as e:
        return error_response(e, "Failed to fetch representatives")

    return JSONResponse(content={
        "results": [rep.to_api() for rep in result["results"]],
        "coordinates": result["coordinates"],
        "zipCode": result["zipCode"],
    })


@router.post("/analyze-bills")
async def analyze_bills(body: dict = Body(...)) -> JSONResponse:
    """Classify up to 20 bills against the given preferences.

    Bills past the first 20 are ignored.
    """
    raw_bills = body.get("bills")
    if not isinstance(raw_bills, list):
        return bad_request("bills array is required")

    try:
        preferences = _parse_preferences(body.get("preferences"))
        bills = [_parse_bill(raw) for raw in raw_bills[:MAX_BATCH_SIZE]]
        analyses = await claude_client.analyze_bills(bills, preferences)
    except CivicPulseError as e:
        return error_response(e, "Failed to analyze bills")

    return JSONResponse(content={"analyses": [a.to_api() for a in analyses]})


@router.post("/generate-script")
async def generate_script(body: dict = Body(...)) -> JSONResponse:
    """Generate a call script for one bill."""
    if not body.get("bill"):
        return bad_request("bill is required")

    try:
        preferences = _parse_preferences(body.get("preferences"))
        recommendation = callable_recommendation(body.get("recommendation"))
        bill = _parse_bill(body["bill"])
        status = body.get("billStatus")
        script = await claude_client.generate_call_script(
            bill,
            preferences,
            recommendation.value,
            status,
            specific_ask(status, recommendation),
        )
    except CivicPulseError as e:
        return error_response(e, "Failed to generate script")

    return JSONResponse(content={"script": script})


@router.get("/issues")
async def list_issues() -> JSONResponse:
    """The policy issue catalog, grouped by category."""
    return JSONResponse(content={
        "categories": {category.value: label for category, label in ISSUE_CATEGORY_LABELS.items()},
        "issues": [issue.model_dump(mode="json", by_alias=True) for issue in POLICY_ISSUES],
    })
