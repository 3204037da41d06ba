"""
Tienda Back Office — Authentication Service
=============================================

What:  Checks an email/password pair against the stored bcrypt hash.
Why:   Login must not reveal whether an email is registered, neither through
       the response body nor through how long the check takes.
How:   Both failure paths raise the same AuthenticationError, and an unknown
       email still pays for one bcrypt verification (against a dummy hash).
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backoffice.exceptions import AuthenticationError
from backoffice.models.user import User
from backoffice.services.security import burn_verification, verify_password
from backoffice.services.user_service import UserService, user_service

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, users: UserService = user_service):
        self.users = users

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        """
        Returns the matching user.

        Raises:
            AuthenticationError: unknown email or wrong password (→ 401)
            DatabaseError: lookup failed (→ 500)
        """
        user = await self.users.get_user_by_email(db, email)

        if user is None:
            await run_in_threadpool(burn_verification, password)
            logger.info("Login rejected: unknown email")
            raise AuthenticationError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("Login rejected: wrong password for user %s", user.id)
            raise AuthenticationError()

        logger.info("Login accepted for user %s", user.id)
        return user


auth_service = AuthService()
