"""
Tienda Back Office — Product Controller
=========================================

What:  Turns routed product requests into ProductService calls and JSON responses.
Why:   Validation and status codes live here; SQL lives in the service.
Who:   Called by the /api dispatcher for resource "products".

Status codes:
    list    200
    get     400 bad id · 404 missing · 200
    create  400 bad body · 201
    update  400 bad id or body · 404 missing · 200
    delete  400 bad id · 404 missing · 200
    search  400 empty term · 200
    any     500 on data access failure (raised by the service)
"""

import logging
from typing import Any, List, Optional

from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.validation import parse_id, validate_body
from backoffice.exceptions import NotFoundError, ValidationError
from backoffice.models.product import Product
from backoffice.schemas.product import ProductInput, ProductResponse
from backoffice.services.product_service import ProductService, product_service

logger = logging.getLogger(__name__)

INVALID_PRODUCT_MESSAGE = "Incomplete or invalid product data"


def _serialize(products: List[Product]) -> List[dict]:
    return [ProductResponse.model_validate(p).model_dump(mode="json") for p in products]


class ProductController:

    def __init__(self, service: ProductService = product_service):
        self.service = service

    async def list(self, db: AsyncSession) -> JSONResponse:
        products = await self.service.list_products(db)
        return JSONResponse(status_code=200, content=_serialize(products))

    async def get(self, db: AsyncSession, product_id: Any) -> JSONResponse:
        pid = parse_id(product_id)
        product = await self.service.get_product(db, pid)
        if product is None:
            raise NotFoundError(resource="product", resource_id=str(pid))
        return JSONResponse(
            status_code=200,
            content=ProductResponse.model_validate(product).model_dump(mode="json"),
        )

    async def create(self, db: AsyncSession, body: Any) -> JSONResponse:
        data = validate_body(ProductInput, body, INVALID_PRODUCT_MESSAGE)
        product = await self.service.create_product(db, data)
        return JSONResponse(
            status_code=201,
            content={"mensaje": "Product created successfully", "id": product.id},
        )

    async def update(self, db: AsyncSession, product_id: Any, body: Any) -> JSONResponse:
        pid = parse_id(product_id)
        data = validate_body(ProductInput, body, INVALID_PRODUCT_MESSAGE)
        if await self.service.get_product(db, pid) is None:
            raise NotFoundError(resource="product", resource_id=str(pid))
        await self.service.update_product(db, pid, data)
        return JSONResponse(status_code=200, content={"mensaje": "Product updated successfully"})

    async def delete(self, db: AsyncSession, product_id: Any) -> JSONResponse:
        pid = parse_id(product_id)
        if await self.service.get_product(db, pid) is None:
            raise NotFoundError(resource="product", resource_id=str(pid))
        await self.service.delete_product(db, pid)
        return JSONResponse(status_code=200, content={"mensaje": "Product deleted successfully"})

    async def search(self, db: AsyncSession, term: Optional[str]) -> JSONResponse:
        term = (term or "").strip()
        if not term:
            raise ValidationError(
                message="Empty search term",
                errors=[{"field": "q", "message": "A search term is required"}],
            )
        products = await self.service.search_products(db, term)
        return JSONResponse(status_code=200, content=_serialize(products))


product_controller = ProductController()
