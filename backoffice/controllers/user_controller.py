"""
Tienda Back Office — User Controller
======================================

What:  Turns routed user requests into UserService calls and JSON responses.
Who:   Called by the /api dispatcher for resource "users".

Differences from ProductController:
    - create requires full_name, email and a password of 6+ characters,
      and answers 409 when the email is taken
    - update changes name and email only; keeping one's own email never
      runs the conflict check
    - responses go through UserResponse, which has no password field
    - no search
"""

import logging
from typing import Any

from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.validation import parse_id, validate_body
from backoffice.exceptions import ConflictError, NotFoundError
from backoffice.schemas.user import UserCreateInput, UserResponse, UserUpdateInput
from backoffice.services.user_service import EMAIL_TAKEN_MESSAGE, UserService, user_service

logger = logging.getLogger(__name__)


class UserController:

    def __init__(self, service: UserService = user_service):
        self.service = service

    async def list(self, db: AsyncSession) -> JSONResponse:
        users = await self.service.list_users(db)
        return JSONResponse(
            status_code=200,
            content=[UserResponse.model_validate(u).model_dump(mode="json") for u in users],
        )

    async def get(self, db: AsyncSession, user_id: Any) -> JSONResponse:
        uid = parse_id(user_id)
        user = await self.service.get_user(db, uid)
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(uid))
        return JSONResponse(
            status_code=200,
            content=UserResponse.model_validate(user).model_dump(mode="json"),
        )

    async def create(self, db: AsyncSession, body: Any) -> JSONResponse:
        """
        Register a user.

        Order of checks:
            1. body shape and fields (400), all field errors reported together
            2. advisory email check (409)
            3. insert; a concurrent duplicate still surfaces as 409
        """
        data = validate_body(
            UserCreateInput,
            body,
            "Missing or invalid data: full_name, email and a password of at least 6 characters are required",
        )
        if await self.service.email_exists(db, data.email):
            raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"email": data.email})
        user = await self.service.create_user(db, data)
        return JSONResponse(
            status_code=201,
            content={"mensaje": "User registered successfully", "id": user.id},
        )

    async def update(self, db: AsyncSession, user_id: Any, body: Any) -> JSONResponse:
        uid = parse_id(user_id)
        data = validate_body(
            UserUpdateInput, body, "Missing or invalid data: full_name and email are required"
        )
        current = await self.service.get_user(db, uid)
        if current is None:
            raise NotFoundError(resource="user", resource_id=str(uid))
        if current.email != data.email and await self.service.email_exists(db, data.email):
            raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"user_id": uid})
        await self.service.update_user(db, uid, data)
        return JSONResponse(status_code=200, content={"mensaje": "User updated successfully"})

    async def delete(self, db: AsyncSession, user_id: Any) -> JSONResponse:
        uid = parse_id(user_id)
        if await self.service.get_user(db, uid) is None:
            raise NotFoundError(resource="user", resource_id=str(uid))
        await self.service.delete_user(db, uid)
        return JSONResponse(status_code=200, content={"mensaje": "User deleted successfully"})


user_controller = UserController()
