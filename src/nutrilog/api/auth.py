"""Session cookie handling and login endpoints."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from nutrilog.api.schemas import LoginRequest  # noqa: TC001
from nutrilog.domain.errors import UnauthorizedError

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

INVALID_CREDENTIALS = "Invalid username or password."

router = APIRouter(prefix="/account", tags=["account"])
_logger = logging.getLogger(__name__)


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def session_token(request: Request) -> str | None:
    """Return the raw session token from the request cookie."""
    container = get_container(request)
    return request.cookies.get(container.settings.session_cookie_name)


def current_user_id(request: Request) -> UUID:
    """Resolve the session cookie to a user id or reject the request."""
    container = get_container(request)
    user_id = container.session_service.resolve(session_token(request))
    if user_id is None:
        raise UnauthorizedError("Not logged in")
    return user_id


def set_session_cookie(response: Response, container: AppContainer, token: str) -> None:
    """Attach the session cookie for a freshly created session."""
    max_age = int(timedelta(days=container.settings.session_days).total_seconds())
    response.set_cookie(
        container.settings.session_cookie_name,
        token,
        max_age=max_age,
        expires=max_age,
        path="/",
        secure=container.settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response, container: AppContainer) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        container.settings.session_cookie_name,
        path="/",
        secure=container.settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )


@router.post("/login", status_code=status.HTTP_204_NO_CONTENT)
async def login(payload: LoginRequest, request: Request) -> Response:
    """Verify credentials and start a session."""
    container = get_container(request)
    user = await run_in_threadpool(
        container.user_service.authenticate, payload.username, payload.password
    )
    if user is None:
        _logger.info("Failed login for %r", payload.username)
        raise UnauthorizedError(INVALID_CREDENTIALS)
    token = await run_in_threadpool(container.session_service.create, user.id)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    set_session_cookie(response, container, token)
    return response


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> Response:
    """End the current session and clear the cookie."""
    container = get_container(request)
    await run_in_threadpool(container.session_service.delete, session_token(request))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookie(response, container)
    return response
