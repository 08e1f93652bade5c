"""Routes driving the single-user recommendation session."""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from civicpulse.exceptions import CivicPulseError
from civicpulse.models.preference import UserPreference
from civicpulse.routers.errors import error_response
from civicpulse.services import claude_client, openstates_client
from civicpulse.services.browsing import BrowsingFilter
from civicpulse.services.classification import ClassificationOrchestrator
from civicpulse.services.result_cache import LocalResultCache, get_result_cache
from civicpulse.services.scripts import ScriptOrchestrator
from civicpulse.services.session import BillFeed, CivicSession

router = APIRouter(prefix="/session", tags=["session"])


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ZipCodeBody(_Body):
    zip_code: str = Field(alias="zipCode")


class PreferencesBody(_Body):
    preferences: list[UserPreference]


class FilterBody(_Body):
    filter: BrowsingFilter


class SwipeBody(_Body):
    start_x: float = Field(alias="startX")
    end_x: float = Field(alias="endX")


class CallBody(_Body):
    representative_id: Optional[str] = Field(default=None, alias="representativeId")
    recommendation: Optional[str] = None


@lru_cache
def get_session() -> CivicSession:
    """Get the process-wide session, wired to the real collaborators."""
    cache = get_result_cache()
    return CivicSession(
        feed=BillFeed(
            openstates_client.fetch_recent_bills,
            ClassificationOrchestrator(cache, claude_client),
        ),
        scripts=ScriptOrchestrator(cache, claude_client),
        lookup_representatives=openstates_client.fetch_representatives,
    )


@router.get("")
async def get_state(session: CivicSession = Depends(get_session)) -> JSONResponse:
    return JSONResponse(content=session.to_api())


@router.post("/zip")
async def set_zip_code(
    body: ZipCodeBody, session: CivicSession = Depends(get_session)
) -> JSONResponse:
    try:
        session.set_zip_code(body.zip_code)
    except CivicPulseError as e:
        return error_response(e, "Failed to set zip code")
    return JSONResponse(content=session.to_api())


@router.put("/preferences")
async def update_preferences(
    body: PreferencesBody, session: CivicSession = Depends(get_session)
) -> JSONResponse:
    """Merge positions into the session; later positions for an issue win."""
    session.update_preferences(body.preferences)
    return JSONResponse(content=session.to_api())


@router.post("/bills/load")
async def load_bills(session: CivicSession = Depends(get_session)) -> JSONResponse:
    """Fetch recent bills and classify them against the session's positions."""
    try:
        results = await session.load_bills()
    except CivicPulseError as e:
        return error_response(e, "Failed to load bills")

    content = session.to_api()
    content["superseded"] = results is None
    return JSONResponse(content=content)


@router.get("/bills")
async def list_bills(session: CivicSession = Depends(get_session)) -> JSONResponse:
    """Ranked bills under the current filter."""
    return JSONResponse(content={
        "state": session.feed.state.value,
        "error": session.feed.error,
        "bills": [item.to_api() for item in session.browsing.filtered],
        "browsing": session.browsing.to_api(),
    })


@router.post("/filter")
async def set_filter(
    body: FilterBody, session: CivicSession = Depends(get_session)
) -> JSONResponse:
    session.browsing.set_filter(body.filter)
    return JSONResponse(content=session.browsing.to_api())


@router.post("/next")
async def next_bill(session: CivicSession = Depends(get_session)) -> JSONResponse:
    moved = await session.browsing.next()
    return JSONResponse(content={"moved": moved, "browsing": session.browsing.to_api()})


@router.post("/previous")
async def previous_bill(session: CivicSession = Depends(get_session)) -> JSONResponse:
    moved = await session.browsing.previous()
    return JSONResponse(content={"moved": moved, "browsing": session.browsing.to_api()})


@router.post("/swipe")
async def swipe(body: SwipeBody, session: CivicSession = Depends(get_session)) -> JSONResponse:
    moved = await session.browsing.swipe(body.start_x, body.end_x)
    return JSONResponse(content={"moved": moved, "browsing": session.browsing.to_api()})


@router.get("/representatives")
async def list_representatives(session: CivicSession = Depends(get_session)) -> JSONResponse:
    try:
        representatives = await session.representatives()
    except CivicPulseError as e:
        return error_response(e, "Failed to fetch representatives")
    return JSONResponse(content={"results": [rep.to_api() for rep in representatives]})


@router.post("/call")
async def prepare_call(
    body: CallBody, session: CivicSession = Depends(get_session)
) -> JSONResponse:
    """Pick a representative and get the call script for the current bill."""
    try:
        call = await session.call(body.representative_id, body.recommendation)
    except CivicPulseError as e:
        return error_response(e, "Failed to prepare call")
    return JSONResponse(content=call)


@router.post("/restart")
async def restart(session: CivicSession = Depends(get_session)) -> JSONResponse:
    session.restart()
    return JSONResponse(content=session.to_api())


@router.get("/cache")
async def cache_stats(cache: LocalResultCache = Depends(get_result_cache)) -> JSONResponse:
    return JSONResponse(content=cache.stats())


@router.delete("/cache")
async def clear_cache(cache: LocalResultCache = Depends(get_result_cache)) -> JSONResponse:
    """Remove every cached analysis and script."""
    removed = cache.clear_all()
    return JSONResponse(content={"removed": removed, "stats": cache.stats()})
