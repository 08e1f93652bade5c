"""Translate pipeline exceptions into JSON error responses."""

import logging

from fastapi.responses import JSONResponse

from civicpulse.exceptions import CivicPulseError, ConfigurationMissing, ValidationFailure

logger = logging.getLogger(__name__)


def error_response(error: CivicPulseError, message: str) -> JSONResponse:
    """Build an {"error": ...} response.

    Validation problems are the caller's fault (400) and carry their own
    message. Everything else is a 500 with the route's generic message.
    """
    if isinstance(error, ValidationFailure):
        return JSONResponse(content={"error": str(error)}, status_code=400)

    logger.error("%s: %s", message, error)
    if isinstance(error, ConfigurationMissing):
        return JSONResponse(content={"error": "API key not configured"}, status_code=500)
    return JSONResponse(content={"error": message}, status_code=500)


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=400)
