"""Product and quote schemas; money travels as decimal strings."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0, decimal_places=2)


class ProductResponse(BaseModel):
    id: int
    name: str
    price: Decimal


class QuoteLineRequest(BaseModel):
    product_id: int = Field(ge=1)
    quantity: int = Field(default=1, ge=1)
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)


class QuoteCreateRequest(BaseModel):
    customer_id: int = Field(ge=1)
    taxes: Decimal = Field(default=Decimal("20"), ge=0, le=100)
    lines: list[QuoteLineRequest] = Field(min_length=1)


class QuoteLineResponse(BaseModel):
    product_id: int
    quantity: int
    price: Decimal


class QuoteResponse(BaseModel):
    id: int
    customer_id: int
    taxes: Decimal
    subtotal: Decimal
    total: Decimal
    lines: list[QuoteLineResponse] = Field(default_factory=list)
