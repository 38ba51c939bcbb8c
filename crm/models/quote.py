"""Quote and quote line models."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.models.base import Base, TimestampMixin


class Quote(Base, TimestampMixin):
    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False, index=True)
    # Percentage applied on top of the subtotal.
    taxes: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0"))

    customer = relationship("Customer", back_populates="quotes")
    quote_products = relationship(
        "ProductQuote",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="ProductQuote.id",
    )


class ProductQuote(Base):
    __tablename__ = "product_quote"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quote_id: Mapped[int] = mapped_column(ForeignKey("quotes.id"), nullable=False)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    # Minor currency units, copied from the product at quoting time unless overridden.
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    quote = relationship("Quote", back_populates="quote_products")
    product = relationship("Product")
