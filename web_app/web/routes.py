"""Redirect routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

router = APIRouter()

WELCOME_MESSAGE = "Welcome to Shorty! Use POST to /shorty to create a short URL."

# Methods that never resolve a short key
NON_GET_METHODS = ["HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the welcome text; an empty key is never looked up."""
    return PlainTextResponse(content=WELCOME_MESSAGE, status_code=status.HTTP_200_OK)


@router.get("/{short_key:path}", include_in_schema=False)
async def redirect_to_url(request: Request, short_key: str):
    """Redirect to the original URL."""
    store = request.app.state.store

    original_url, found = await run_in_threadpool(store.get, short_key)

    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


@router.api_route("/{path:path}", methods=NON_GET_METHODS, include_in_schema=False)
async def not_found(request: Request, path: str):
    """Anything that is not a GET outside /shorty is unknown."""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Not Found",
    )
