"""
Tienda Back Office — Product Service (Data Access)
====================================================

What:  Owns every query against the `productos` table.
Why:   Keeps SQL out of the controllers; controllers only decide status codes.
How:   One SQLAlchemy statement per operation on the request's AsyncSession.
       Writes are committed here so the controller answers only after the
       row is durable.
Who:   Called by ProductController.

Error Handling Strategy:
    SQLAlchemy and socket errors are logged with their detail and re-raised
    as DatabaseError, whose client-facing message is generic. "Not found" is
    not an error at this layer: lookups return None and the controller
    decides.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.exceptions import DatabaseError
from backoffice.models.product import Product
from backoffice.schemas.product import ProductInput

logger = logging.getLogger(__name__)

# Largest value an INTEGER primary key can hold; bigger ids cannot exist
MAX_ID = 2**31 - 1

# Backslash escapes LIKE wildcards typed by the user
_LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class ProductService:
    """
    Data access for products.

    Responsibilities:
        - list_products(): all rows, newest first
        - get_product(): single row or None
        - create_product() / update_product() / delete_product()
        - search_products(): case-insensitive substring on name or category
    """

    async def list_products(self, db: AsyncSession) -> List[Product]:
        """
        Query plan:
            SELECT * FROM productos ORDER BY fecha_creacion DESC, id DESC
            → idx_productos_fecha_creacion
        """
        try:
            result = await db.execute(
                select(Product).order_by(desc(Product.created_at), desc(Product.id))
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products.",
                context={"error_type": type(e).__name__},
            )

    async def get_product(self, db: AsyncSession, product_id: int) -> Optional[Product]:
        if product_id > MAX_ID:
            return None
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    async def create_product(self, db: AsyncSession, data: ProductInput) -> Product:
        """
        Insert a new product and return it with its server-assigned id and timestamp.

        Raises:
            DatabaseError: insert or commit failed (→ 500)
        """
        product = Product(**data.model_dump())
        try:
            db.add(product)
            await db.flush()  # Assigns the id
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the product.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Product created: id=%s name=%r", product.id, product.name)
        return product

    async def update_product(self, db: AsyncSession, product_id: int, data: ProductInput) -> None:
        """
        UPDATE productos SET ... WHERE id = :id

        The controller has already confirmed the row exists.
        """
        try:
            await db.execute(
                update(Product).where(Product.id == product_id).values(**data.model_dump())
            )
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )
        logger.info("Product updated: id=%s", product_id)

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        try:
            await db.execute(delete(Product).where(Product.id == product_id))
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            await db.rollback()
            logger.error("Database error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )
        logger.info("Product deleted: id=%s", product_id)

    async def search_products(self, db: AsyncSession, term: str) -> List[Product]:
        """
        Case-insensitive substring match on name OR category.

        Query plan:
            SELECT * FROM productos
            WHERE nombre ILIKE :pattern OR categoria ILIKE :pattern
            ORDER BY fecha_creacion DESC
        """
        pattern = _like_pattern(term)
        try:
            result = await db.execute(
                select(Product)
                .where(
                    or_(
                        Product.name.ilike(pattern, escape=_LIKE_ESCAPE),
                        Product.category.ilike(pattern, escape=_LIKE_ESCAPE),
                    )
                )
                .order_by(desc(Product.created_at), desc(Product.id))
            )
            return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error searching products for %r: %s", term, str(e))
            raise DatabaseError(
                message="Could not search products.",
                context={"term": term, "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
