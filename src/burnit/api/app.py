"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from burnit.api.foods import router as foods_router
from burnit.api.goals import router as goals_router
from burnit.app_logging import configure_logging
from burnit.config import parse_cors_origins
from burnit.containers import AppContainer
from burnit.domain.errors import TrackerError
from burnit.serialization import search_result_to_dict

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Something went wrong!"
SEARCH_FAILED = "Food search is unavailable"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting food log API (store=%s)",
            app.state.container.settings.store_backend,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(foods_router)
    app.include_router(goals_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe with the server time."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.get("/search")
    async def search_foods(
        request: Request, q: str = "", limit: int = 15
    ) -> list[dict[str, object]]:
        """Search the USDA FoodData Central catalog."""
        state_container: AppContainer = request.app.state.container
        try:
            results = await state_container.nutrition_service.search(q, limit=limit)
        except httpx.HTTPError as exc:
            logger.exception("Food search failed", extra={"query": q})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=SEARCH_FAILED
            ) from exc
        return [search_result_to_dict(result) for result in results]

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed: %s", exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": ROUTE_NOT_FOUND},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR},
        )

    return app


def _first_validation_message(exc: RequestValidationError) -> str:
    """Render the first pydantic error as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part)
        for part in first.get("loc", ())
        if part not in {"body", "query", "path"}
    )
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
