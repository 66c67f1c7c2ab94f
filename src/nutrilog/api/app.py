"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from nutrilog.api.account import router as account_router
from nutrilog.api.auth import router as auth_router
from nutrilog.api.nutrition import router as nutrition_router
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer
from nutrilog.domain.errors import (
    ForbiddenError,
    InvalidReferenceError,
    NotFoundError,
    NutrilogError,
    ReferenceConflictError,
    UnauthorizedError,
)

_STATUS_BY_ERROR: tuple[tuple[type[NutrilogError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidReferenceError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (ReferenceConflictError, status.HTTP_409_CONFLICT),
)


async def purge_sessions_periodically(
    container: AppContainer, interval_seconds: float
) -> None:
    """Delete expired sessions every ``interval_seconds`` until cancelled."""
    logger = logging.getLogger(__name__)
    while True:
        try:
            await run_in_threadpool(container.session_service.purge_expired)
        except Exception:
            logger.exception("Failed to purge expired sessions")
        await asyncio.sleep(interval_seconds)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        interval = container.settings.session_purge_interval_seconds
        purge_task = None
        if interval > 0:
            purge_task = asyncio.create_task(
                purge_sessions_periodically(app.state.container, interval)
            )
        yield
        if purge_task is not None:
            purge_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await purge_task

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(account_router)
    app.include_router(nutrition_router)

    @app.exception_handler(NutrilogError)
    async def handle_domain_error(
        request: Request, exc: NutrilogError
    ) -> JSONResponse:
        for error_type, status_code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return JSONResponse(
                    status_code=status_code, content={"detail": str(exc)}
                )
        logger.error(
            "Request %s %s failed",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
