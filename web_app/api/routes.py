"""API routes implementation."""

import logging

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ErrorResponse,
)
from shorty.exceptions import KeyGenerationError

router = APIRouter()

logger = logging.getLogger("shorty.web")

# Every method the /shorty path refuses
NON_POST_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def parse_shorten_request(request: Request) -> ShortenRequest:
    """Decode the request body as JSON whatever its Content-Type.

    Args:
        request: Incoming request

    Returns:
        Validated request payload

    Raises:
        RequestValidationError: If the body is not JSON or fails validation
    """
    raw = await request.body()
    try:
        return ShortenRequest.model_validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


@router.post(
    "/shorty",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Key generation failed"},
    },
    summary="Create short URL",
    description="Store a URL under a generated key, or under customKey if given.",
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    store = request.app.state.store
    body = await parse_shorten_request(request)

    try:
        short_key = await run_in_threadpool(store.add, body.url, body.custom_key)
    except KeyGenerationError as e:
        logger.error(f"Failed to create short key: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create short key",
        )

    return ShortenResponse(short_key=short_key)


@router.api_route("/shorty", methods=NON_POST_METHODS, include_in_schema=False)
async def shorten_method_not_allowed(request: Request):
    """Reject anything but POST on the create endpoint."""
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
        headers={"Allow": "POST"},
    )
