"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from crm.api.v1 import (
    auth,
    board,
    custom_fields,
    customers,
    documents,
    health,
    lead_sources,
    pipeline_stages,
    quotes,
    tags,
    tasks,
    users,
)
from crm.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(pipeline_stages.router)
api_router.include_router(customers.router)
api_router.include_router(board.router)
api_router.include_router(lead_sources.router)
api_router.include_router(tags.router)
api_router.include_router(custom_fields.router)
api_router.include_router(tasks.router)
api_router.include_router(quotes.router)
api_router.include_router(documents.router)
api_router.include_router(users.router)


def get_api_router() -> APIRouter:
    return api_router
