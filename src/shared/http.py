"""HTTP plumbing shared by the FastAPI apps.

``MarketplaceError`` subclasses become ``{"message": ..., **details}`` with
their own status code. Protean's handlers cover its ``ValidationError`` and
friends. Anything else is logged and answered with a bare 500.

``register_domain_context`` wraps each request in the Protean domain that
owns its URL prefix.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.errors import MarketplaceError
from shared.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", error=type(exc).__name__, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=type(exc).__name__, path=request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def resolve_domain(route_domain_map: dict, path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in route_domain_map.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


def register_domain_context(app: FastAPI, route_domain_map: dict) -> None:
    """Push the correct Protean domain context for each request."""

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        clear_context()
        add_context(path=request.url.path, method=request.method)
        domain = resolve_domain(route_domain_map, request.url.path)
        try:
            if domain is not None:
                with domain.domain_context():
                    return await call_next(request)
            # No domain match, pass through (health check, docs, etc.)
            return await call_next(request)
        finally:
            clear_context()
