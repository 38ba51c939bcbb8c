"""Products and customer quotes.

Prices are stored in minor units (cents) and exposed as two-place `Decimal`s.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from crm.core.exceptions import ValidationError
from crm.models import Customer, Product, ProductQuote, Quote
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
DEFAULT_TAXES = Decimal("20")


def to_cents(amount: Decimal | int | float | str) -> int:
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    if value < 0:
        raise ValidationError("Amounts must not be negative.")
    return int(value * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal
    taxes: Decimal
    total: Decimal


def quote_totals(lines: list[ProductQuote], taxes: Decimal | int | None) -> QuoteTotals:
    subtotal_cents = sum(line.price * line.quantity for line in lines)
    rate = Decimal(str(taxes)) if taxes is not None else Decimal("0")
    subtotal = from_cents(subtotal_cents)
    total = (subtotal * (1 + rate / 100)).quantize(CENT, rounding=ROUND_HALF_UP)
    return QuoteTotals(subtotal=subtotal, taxes=rate, total=total)


class QuoteService(BaseService):
    def list_products(self) -> list[Product]:
        return list(self.db.scalars(select(Product).order_by(Product.id)))

    def create_product(self, name: str, price: Decimal | int | float | str) -> Product:
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Product name is required.")
        product = Product(name=cleaned, price=to_cents(price))
        self.db.add(product)
        self.commit()
        self.db.refresh(product)
        return product

    def get(self, quote_id: int) -> Quote:
        stmt = select(Quote).options(selectinload(Quote.quote_products)).where(Quote.id == quote_id)
        quote = self.db.scalars(stmt).first()
        if quote is None:
            return self._get_or_raise(Quote, quote_id, "Quote")
        return quote

    def for_customer(self, customer_id: int) -> list[Quote]:
        stmt = select(Quote).where(Quote.customer_id == customer_id).order_by(Quote.id)
        return list(self.db.scalars(stmt))

    def create(
        self,
        customer_id: int,
        lines: list[dict[str, Any]],
        taxes: Decimal | int | None = DEFAULT_TAXES,
    ) -> Quote:
        """Create a quote; each line is `{product_id, quantity, price?}`.

        A line without a price takes the product's current price. A product
        may appear only once per quote.
        """
        self._get_or_raise(Customer, customer_id, "Customer")
        if not lines:
            raise ValidationError("A quote needs at least one product line.")

        product_ids = [line["product_id"] for line in lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError("Each product may appear only once per quote.")

        quote = Quote(customer_id=customer_id, taxes=Decimal(str(taxes if taxes is not None else 0)))
        for line in lines:
            product = self._get_or_raise(Product, line["product_id"], "Product")
            quantity = int(line.get("quantity", 1))
            if quantity < 1:
                raise ValidationError("Quantity must be at least 1.")
            price = line.get("price")
            quote.quote_products.append(
                ProductQuote(
                    product_id=product.id,
                    quantity=quantity,
                    price=product.price if price is None else to_cents(price),
                )
            )

        self.db.add(quote)
        self.commit()
        self.db.refresh(quote)
        logger.info("quote.created", extra={"event": "quote.created", "quote_id": quote.id, "customer_id": customer_id})
        self.notifier.success("Quote created")
        return quote

    def totals(self, quote: Quote) -> QuoteTotals:
        return quote_totals(list(quote.quote_products), quote.taxes)
