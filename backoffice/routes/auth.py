"""
Tienda Back Office — Authentication Routes
============================================

What:  POST /api/login, GET|POST /logout, GET /menu.
How:   Reads the session cookie, injects the SessionStore, and delegates
       to AuthController. Independent of the CRUD dispatcher; shares only
       the database session dependency.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.config import settings
from backoffice.controllers.auth_controller import auth_controller
from backoffice.database import get_db_session
from backoffice.exceptions import MethodNotAllowedError
from backoffice.routes.api import read_json_body
from backoffice.schemas.common import ErrorResponse
from backoffice.services.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.api_route(
    "/api/login",
    methods=["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"],
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        405: {"description": "Only POST is accepted", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    sessions: SessionStore = Depends(get_session_store),
) -> Response:
    """
    Starts a session and sets the session cookie.

    Only POST is served; other verbs are routed here so they get the same
    JSON 405 body as the rest of the API.
    """
    if request.method != "POST":
        raise MethodNotAllowedError(allowed=["POST"], context={"method": request.method})
    body = await read_json_body(request)
    return await auth_controller.login(
        db,
        body,
        sessions,
        current_token=request.cookies.get(settings.session_cookie_name),
    )


@router.api_route("/logout", methods=["GET", "POST"], summary="End the current session")
async def logout(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
) -> Response:
    return auth_controller.logout(sessions, request.cookies.get(settings.session_cookie_name))


@router.get("/menu", summary="User menu (requires a session)")
async def menu(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
) -> Response:
    return auth_controller.menu(sessions, request.cookies.get(settings.session_cookie_name))
