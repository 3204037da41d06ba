"""
Tienda Back Office — Product Request/Response Schemas
=======================================================

What:  Pydantic models for product bodies and product representations.
Why:   Request bodies are validated up front, and every field error is
       reported together instead of stopping at the first one.
How:   ProductController feeds the decoded JSON body to ProductInput;
       ProductService rows are serialized through ProductResponse.

Field rules:
    name      required, trimmed, 1..100 chars
    price     required, number or numeric string, finite, > 0, rounded
              half-up to cents like the NUMERIC(10, 2) column would;
              at most 99999999.99 (the column's range)
    description/size/color/category
              optional, trimmed, missing or null → ""
    image     optional, trimmed, null stays null
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from backoffice.models.product import (
    CATEGORY_MAX_LENGTH,
    COLOR_MAX_LENGTH,
    IMAGE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SIZE_MAX_LENGTH,
)

# NUMERIC(10, 2): cents, eight integer digits
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")


class ProductInput(BaseModel):
    """Body accepted by POST and PUT on the products resource."""

    model_config = {"str_strip_whitespace": True}

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    price: Decimal = Field(gt=0)
    description: str = ""
    size: str = Field(default="", max_length=SIZE_MAX_LENGTH)
    color: str = Field(default="", max_length=COLOR_MAX_LENGTH)
    category: str = Field(default="", max_length=CATEGORY_MAX_LENGTH)
    image: Optional[str] = Field(default=None, max_length=IMAGE_MAX_LENGTH)

    @field_validator("description", "size", "color", "category", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """Explicit nulls on optional text fields are stored as empty strings."""
        return "" if v is None else v

    @field_validator("price")
    @classmethod
    def round_price(cls, v: Decimal) -> Decimal:
        """Rounds half-up to cents; the result must still fit the column and be positive."""
        # Checked before quantize(), which fails on values beyond the decimal context
        if v > MAX_PRICE:
            raise ValueError(f"Price must not exceed {MAX_PRICE}")
        rounded = v.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        if rounded <= 0:
            raise ValueError(f"Price must be at least {PRICE_QUANTUM} after rounding to cents")
        return rounded


class ProductResponse(BaseModel):
    """
    What:  Public representation of a product row.
    Who:   Returned by list, get and search.
    Why float price: clients expect a JSON number, not a quoted decimal.
    """
    id: int
    name: str
    description: str
    price: float
    size: str
    color: str
    category: str
    image: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
