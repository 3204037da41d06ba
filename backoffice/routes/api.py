"""
Tienda Back Office — CRUD Endpoint
====================================

What:  The single `/api` endpoint serving both resources.
How:   `dispatch.resolve()` picks the action from (verb, ?path=); this module
       only gathers what that action needs (identifier, JSON body, ?q=) and
       calls the matching controller method.

Examples:
    GET    /api?path=products                 list
    GET    /api?path=products/7               get
    GET    /api?path=products/search&q=cam    search
    POST   /api?path=users                    create (JSON body)
    PUT    /api?path=users/3                  update (JSON body)
    DELETE /api?path=products/7               delete
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.product_controller import product_controller
from backoffice.controllers.user_controller import user_controller
from backoffice.database import get_db_session
from backoffice.dispatch import PRODUCTS, USERS, Action, RouteMatch, resolve
from backoffice.schemas.common import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Back Office"])

CONTROLLERS: Dict[str, Any] = {
    PRODUCTS: product_controller,
    USERS: user_controller,
}

# Every verb reaches the dispatcher so unsupported ones get the table's 405
ACCEPTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not valid JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Request body is not valid JSON")
        return None


async def call_action(match: RouteMatch, db: AsyncSession, request: Request) -> JSONResponse:
    controller = CONTROLLERS[match.resource]
    action = match.action

    if action is Action.LIST:
        return await controller.list(db)
    if action is Action.GET:
        return await controller.get(db, match.identifier)
    if action is Action.SEARCH:
        return await controller.search(db, request.query_params.get("q"))
    if action is Action.DELETE:
        return await controller.delete(db, match.identifier)

    body = await read_json_body(request)
    if action is Action.CREATE:
        return await controller.create(db, body)
    return await controller.update(db, match.identifier, body)


@router.api_route(
    "/api",
    methods=ACCEPTED_METHODS,
    responses={
        201: {"description": "Record created", "model": MessageResponse},
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Unknown resource, route or record", "model": ErrorResponse},
        405: {"description": "Verb not supported for this path", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Products and users CRUD",
    description=(
        "Routes on the `path` query parameter (`products`, `products/{id}`, "
        "`products/search`, `users`, `users/{id}`) and the HTTP verb."
    ),
)
async def dispatch_request(
    request: Request,
    path: Optional[str] = Query(default="", description="Resource path, e.g. products/7"),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    match = resolve(request.method, path)
    logger.debug("Dispatching %s %s → %s.%s", request.method, path, match.resource, match.action.value)
    return await call_action(match, db, request)
