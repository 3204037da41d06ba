"""
Tienda Back Office — User Service (Data Access)
=================================================

What:  Owns every query against the `usuarios` table.
How:   One statement per operation; passwords are bcrypt-hashed here,
       right before the INSERT, on a worker thread so the event loop
       keeps serving other requests while bcrypt runs.

Email uniqueness:
    email_exists() is the advisory check the controller runs first for a
    friendly 409. The UNIQUE constraint decides: an IntegrityError on
    INSERT/UPDATE is turned into ConflictError as well.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backoffice.exceptions import ConflictError, DatabaseError
from backoffice.models.user import User
from backoffice.schemas.user import UserCreateInput, UserUpdateInput
from backoffice.services.security import hash_password

logger = logging.getLogger(__name__)

MAX_ID = 2**31 - 1

EMAIL_TAKEN_MESSAGE = "The email is already registered"


class UserService:
    """
    Data access for users.

    Responsibilities:
        - list_users() / get_user() / get_user_by_email()
        - email_exists(): advisory uniqueness check
        - create_user(): hash + insert
        - update_user(): name and email only
        - delete_user()
    """

    async def list_users(self, db: AsyncSession) -> List[User]:
        try:
            result = await db.execute(
                select(User).order_by(desc(User.registered_at), desc(User.id))
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users.",
                context={"error_type": type(e).__name__},
            )

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[User]:
        if user_id > MAX_ID:
            return None
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Lookup used by login; returns the row including its password hash."""
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve the user.",
                context={"error_type": type(e).__name__},
            )

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        """SELECT id FROM usuarios WHERE email = :email"""
        try:
            result = await db.execute(select(User.id).where(User.email == email))
            return result.first() is not None
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error checking email: %s", str(e))
            raise DatabaseError(
                message="Could not verify the email.",
                context={"error_type": type(e).__name__},
            )

    async def create_user(self, db: AsyncSession, data: UserCreateInput) -> User:
        """
        Hash the password and insert the user.

        Raises:
            ConflictError: the email was registered concurrently (→ 409)
            DatabaseError: insert or commit failed (→ 500)
        """
        password_hash = await run_in_threadpool(hash_password, data.password)
        user = User(full_name=data.full_name, email=data.email, password_hash=password_hash)
        try:
            db.add(user)
            await db.flush()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Email uniqueness violated on insert: %s", data.email)
            raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"email": data.email})
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the user.",
                context={"error_type": type(e).__name__},
            )
        logger.info("User registered: id=%s", user.id)
        return user

    async def update_user(self, db: AsyncSession, user_id: int, data: UserUpdateInput) -> None:
        """UPDATE usuarios SET nombre_completo = :name, email = :email WHERE id = :id"""
        try:
            await db.execute(
                update(User)
                .where(User.id == user_id)
                .values(full_name=data.full_name, email=data.email)
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Email uniqueness violated on update of user %s", user_id)
            raise ConflictError(message=EMAIL_TAKEN_MESSAGE, context={"user_id": user_id})
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error updating user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the user.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )
        logger.info("User updated: id=%s", user_id)

    async def delete_user(self, db: AsyncSession, user_id: int) -> None:
        try:
            await db.execute(delete(User).where(User.id == user_id))
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error deleting user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the user.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )
        logger.info("User deleted: id=%s", user_id)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
