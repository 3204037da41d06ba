"""
Tienda Back Office — Product Controller Unit Tests
====================================================

What:  Tests for ProductController input checks and responses.
How:   The ProductService is replaced by AsyncMocks; no database.

What we test:
    ✅ Bad ids and bad bodies are rejected before any service call
    ✅ All invalid fields are reported together
    ✅ Missing products → NotFoundError
    ✅ Create/update/delete acknowledgements
    ✅ Search trims the term and rejects an empty one
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from backoffice.controllers.product_controller import ProductController
from backoffice.exceptions import NotFoundError, ValidationError
from backoffice.models.product import Product
from backoffice.services.product_service import MAX_ID


def make_product(**overrides):
    fields = {
        "id": 1,
        "name": "Camisa",
        "description": "Algodón",
        "price": Decimal("19.99"),
        "size": "M",
        "color": "Azul",
        "category": "Camisas",
        "image": None,
        "created_at": datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Product(**fields)


def body_of(response):
    return json.loads(response.body)


class TestProductControllerReads:

    def setup_method(self):
        self.service = MagicMock()
        self.service.list_products = AsyncMock(return_value=[])
        self.service.get_product = AsyncMock(return_value=None)
        self.service.search_products = AsyncMock(return_value=[])
        self.controller = ProductController(service=self.service)

    @pytest.mark.asyncio
    async def test_list_serializes_products(self, mock_db_session):
        """Price is a JSON number and the creation date is included."""
        self.service.list_products.return_value = [make_product()]

        response = await self.controller.list(mock_db_session)

        assert response.status_code == 200
        payload = body_of(response)
        assert payload[0]["name"] == "Camisa"
        assert payload[0]["price"] == 19.99
        assert payload[0]["image"] is None
        assert "created_at" in payload[0]

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session):
        """No products gives an empty list."""
        response = await self.controller.list(mock_db_session)
        assert body_of(response) == []

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session):
        """A numeric id string is converted before the lookup."""
        self.service.get_product.return_value = make_product(id=7)

        response = await self.controller.get(mock_db_session, "7")

        assert response.status_code == 200
        assert body_of(response)["id"] == 7
        self.service.get_product.assert_awaited_once_with(mock_db_session, 7)

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_db_session):
        """A missing product raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            await self.controller.get(mock_db_session, "99")
        assert exc_info.value.message == "Product not found"

    @pytest.mark.asyncio
    async def test_get_overlong_id_is_not_found(self, mock_db_session):
        """Thousands of digits become an out-of-range id, not a conversion error."""
        with pytest.raises(NotFoundError):
            await self.controller.get(mock_db_session, "7" * 5000)
        self.service.get_product.assert_awaited_once_with(mock_db_session, MAX_ID + 1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["abc", "1.5", "-1", "", None])
    async def test_get_bad_id_never_reaches_service(self, mock_db_session, bad_id):
        """Non-numeric ids fail before any service call."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.get(mock_db_session, bad_id)
        assert exc_info.value.message == "Invalid ID"
        self.service.get_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_trims_term(self, mock_db_session):
        """The search term is trimmed before querying."""
        self.service.search_products.return_value = [make_product()]

        response = await self.controller.search(mock_db_session, "  cam  ")

        assert response.status_code == 200
        self.service.search_products.assert_awaited_once_with(mock_db_session, "cam")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", [None, "", "   "])
    async def test_search_empty_term(self, mock_db_session, term):
        """Empty or blank terms are rejected on the q field."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.search(mock_db_session, term)
        assert exc_info.value.errors[0]["field"] == "q"
        self.service.search_products.assert_not_awaited()


class TestProductControllerWrites:

    def setup_method(self):
        self.service = MagicMock()
        self.service.get_product = AsyncMock(return_value=make_product(id=3))
        self.service.create_product = AsyncMock(return_value=make_product(id=12))
        self.service.update_product = AsyncMock()
        self.service.delete_product = AsyncMock()
        self.controller = ProductController(service=self.service)

    @pytest.mark.asyncio
    async def test_create_returns_201_with_id(self, mock_db_session):
        """Creation trims text, fills defaults and returns the new id."""
        response = await self.controller.create(
            mock_db_session, {"name": " Camisa ", "price": "19.99"}
        )

        assert response.status_code == 201
        assert body_of(response) == {"mensaje": "Product created successfully", "id": 12}
        data = self.service.create_product.await_args.args[1]
        assert data.name == "Camisa"
        assert data.price == Decimal("19.99")
        assert data.category == ""
        assert data.image is None

    @pytest.mark.asyncio
    async def test_create_maps_null_text_fields_to_empty(self, mock_db_session):
        """Explicit nulls on optional text fields become ""."""
        await self.controller.create(
            mock_db_session, {"name": "Gorra", "price": 5, "color": None, "size": None}
        )
        data = self.service.create_product.await_args.args[1]
        assert data.color == ""
        assert data.size == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [0, -5, "abc", None, "NaN"])
    async def test_create_rejects_bad_price(self, mock_db_session, price):
        """A rejected price is never persisted."""
        with pytest.raises(ValidationError):
            await self.controller.create(mock_db_session, {"name": "Camisa", "price": price})
        self.service.create_product.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "price, stored",
        [(19.999, Decimal("20.00")), ("10.004", Decimal("10.00")), ("0.005", Decimal("0.01"))],
    )
    async def test_create_rounds_price_to_cents(self, mock_db_session, price, stored):
        """Extra decimals are rounded half-up instead of rejected."""
        response = await self.controller.create(mock_db_session, {"name": "Camisa", "price": price})

        assert response.status_code == 201
        assert self.service.create_product.await_args.args[1].price == stored

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["0.001", 1.5e10, "1e30"])
    async def test_create_rejects_price_outside_column(self, mock_db_session, price):
        """Prices that round to zero or overflow NUMERIC(10, 2) are reported on the price field."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.create(mock_db_session, {"name": "Camisa", "price": price})

        assert [err["field"] for err in exc_info.value.errors] == ["price"]
        self.service.create_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_reports_every_invalid_field(self, mock_db_session):
        """All invalid fields are reported, not only the first."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.create(mock_db_session, {"name": "   ", "price": 0})

        fields = {err["field"] for err in exc_info.value.errors}
        assert fields == {"name", "price"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, [], "Camisa", 3])
    async def test_create_rejects_non_object_body(self, mock_db_session, body):
        """Bodies that are not JSON objects are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.create(mock_db_session, body)
        assert exc_info.value.message == "Request body must be a JSON object"

    @pytest.mark.asyncio
    async def test_update_success(self, mock_db_session):
        """A valid update on an existing product succeeds."""
        response = await self.controller.update(
            mock_db_session, "3", {"name": "Camisa", "price": 25}
        )

        assert response.status_code == 200
        assert body_of(response) == {"mensaje": "Product updated successfully"}
        self.service.update_product.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_validates_id_before_body(self, mock_db_session):
        """A bad id is reported even when the body is missing."""
        with pytest.raises(ValidationError) as exc_info:
            await self.controller.update(mock_db_session, "abc", None)
        assert exc_info.value.message == "Invalid ID"

    @pytest.mark.asyncio
    async def test_update_invalid_body_skips_lookup(self, mock_db_session):
        """An invalid body fails before the existence check."""
        with pytest.raises(ValidationError):
            await self.controller.update(mock_db_session, "3", {"name": "Camisa"})
        self.service.get_product.assert_not_awaited()
        self.service.update_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_product(self, mock_db_session):
        """Updating a missing product raises NotFoundError."""
        self.service.get_product.return_value = None

        with pytest.raises(NotFoundError):
            await self.controller.update(mock_db_session, "3", {"name": "Camisa", "price": 25})
        self.service.update_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_db_session):
        """Delete converts the id and acknowledges."""
        response = await self.controller.delete(mock_db_session, "3")

        assert body_of(response) == {"mensaje": "Product deleted successfully"}
        self.service.delete_product.assert_awaited_once_with(mock_db_session, 3)

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, mock_db_session):
        """Deleting a missing product raises NotFoundError."""
        self.service.get_product.return_value = None

        with pytest.raises(NotFoundError):
            await self.controller.delete(mock_db_session, "3")
        self.service.delete_product.assert_not_awaited()
