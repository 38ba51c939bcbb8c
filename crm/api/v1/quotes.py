"""Product catalogue and quote endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.database.db import get_db_session
from crm.models import Product, Quote
from crm.schemas.quotes import (
    ProductCreateRequest,
    ProductResponse,
    QuoteCreateRequest,
    QuoteLineResponse,
    QuoteResponse,
)
from crm.services.quote_service import QuoteService, from_cents

router = APIRouter(tags=["quotes"])


def _product(product: Product) -> dict:
    return ProductResponse(id=product.id, name=product.name, price=from_cents(product.price)).model_dump()


def _quote(service: QuoteService, quote: Quote) -> dict:
    totals = service.totals(quote)
    return QuoteResponse(
        id=quote.id,
        customer_id=quote.customer_id,
        taxes=totals.taxes,
        subtotal=totals.subtotal,
        total=totals.total,
        lines=[
            QuoteLineResponse(product_id=line.product_id, quantity=line.quantity, price=from_cents(line.price))
            for line in quote.quote_products
        ],
    ).model_dump()


@router.get("/products")
def list_products(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["quotes.read"])
    with get_db_session() as session:
        return {"items": [_product(product) for product in QuoteService(db=session).list_products()]}


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreateRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["quotes.write"])
    with get_db_session() as session, service_errors():
        product = QuoteService(db=session).create_product(payload.name, payload.price)
        return {"item": _product(product)}


@router.post("/quotes", status_code=status.HTTP_201_CREATED)
def create_quote(payload: QuoteCreateRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["quotes.write"])
    with get_db_session() as session, service_errors():
        service = QuoteService(db=session)
        quote = service.create(
            payload.customer_id,
            [line.model_dump() for line in payload.lines],
            taxes=payload.taxes,
        )
        return {"item": _quote(service, quote), "notifications": drain_notifications(service.notifier)}


@router.get("/quotes/{quote_id}")
def get_quote(quote_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["quotes.read"])
    with get_db_session() as session, service_errors():
        service = QuoteService(db=session)
        return _quote(service, service.get(quote_id))
