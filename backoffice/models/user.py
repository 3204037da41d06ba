"""
Tienda Back Office — User SQLAlchemy Model
============================================

What:  ORM model representing the `usuarios` table.
How:   `password` holds a bcrypt hash; it is never selected into API
       responses (the response schema has no field for it).

Uniqueness:
    The UNIQUE constraint on email is the source of truth. UserService also
    checks for an existing email before writing, but two concurrent
    registrations can both pass that check; the constraint rejects the
    second insert and the service reports it as a conflict.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.database import Base

FULL_NAME_MAX_LENGTH = 150
EMAIL_MAX_LENGTH = 150


class User(Base):
    """A back office account that can log in."""

    __tablename__ = "usuarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    full_name: Mapped[str] = mapped_column(
        "nombre_completo", String(FULL_NAME_MAX_LENGTH), nullable=False,
    )

    email: Mapped[str] = mapped_column("email", String(EMAIL_MAX_LENGTH), nullable=False)

    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)

    registered_at: Mapped[datetime] = mapped_column(
        "fecha_registro",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_usuarios_email"),
    )

    def __repr__(self) -> str:
        # password_hash intentionally left out
        return f"<User(id={self.id}, email='{self.email}')>"
