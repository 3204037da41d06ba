"""
Tienda Back Office — Product SQLAlchemy Model
===============================================

What:  ORM model representing the `productos` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from DeclarativeBase; Alembic migration 001 creates the table.
Who:   Used by ProductService for every product query.

Table Design:
    - Python attribute names are English, column names keep the storefront's
      existing Spanish schema (productos.nombre, productos.precio, ...)
    - precio: NUMERIC(10, 2) with a CHECK (precio > 0) backing the API rule
    - fecha_creacion: assigned on insert; listing orders by it, newest first
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.database import Base

NAME_MAX_LENGTH = 100
SIZE_MAX_LENGTH = 20
COLOR_MAX_LENGTH = 30
CATEGORY_MAX_LENGTH = 50
IMAGE_MAX_LENGTH = 255


class Product(Base):
    """
    A product in the storefront catalogue.

    Lifecycle:
        Created by POST, mutated in place by PUT, removed by DELETE.
        No soft delete, no version history.
    """

    __tablename__ = "productos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column("nombre", String(NAME_MAX_LENGTH), nullable=False)

    description: Mapped[str] = mapped_column(
        "descripcion", Text, nullable=False, default="", server_default=text("''"),
    )

    price: Mapped[Decimal] = mapped_column("precio", Numeric(10, 2), nullable=False)

    # Optional catalogue attributes; stored as "" rather than NULL when absent
    size: Mapped[str] = mapped_column(
        "talla", String(SIZE_MAX_LENGTH), nullable=False, default="", server_default=text("''"),
    )
    color: Mapped[str] = mapped_column(
        "color", String(COLOR_MAX_LENGTH), nullable=False, default="", server_default=text("''"),
    )
    category: Mapped[str] = mapped_column(
        "categoria", String(CATEGORY_MAX_LENGTH), nullable=False, default="", server_default=text("''"),
    )

    # What: URL or storage key of the product picture
    image: Mapped[Optional[str]] = mapped_column("imagen", String(IMAGE_MAX_LENGTH), nullable=True)

    # Python-side default keeps sub-second resolution so inserts made within
    # the same second still list in insertion order
    created_at: Mapped[datetime] = mapped_column(
        "fecha_creacion",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint("precio > 0", name="ck_productos_precio_positivo"),
        Index("idx_productos_fecha_creacion", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
