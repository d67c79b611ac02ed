"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware

CREATE_PATH = "/shorty"


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into a single readable line."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def create_app(store, config) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        store: URLStore instance shared by all requests
        config: Configuration instance
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shorty",
        description="Key-value URL redirect service",
        version="1.0.0",
        # Every GET path is a potential short key, so no docs routes
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    
    # Store instances in app state for access in routes
    app.state.store = store
    app.state.config = config
    
    app.add_middleware(LoggingMiddleware)
    
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed or incomplete request bodies are client errors (400)."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _describe_validation_errors(exc)},
        )
    
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        """Only /shorty answers 405; a wrong method anywhere else is 404."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path != CREATE_PATH:
            exc = StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
        return await http_exception_handler(request, exc)
    
    # Order matters: /shorty must be matched before the catch-all key route
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
