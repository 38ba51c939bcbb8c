"""Board endpoints: columns per pipeline stage and drag-and-drop moves."""

from __future__ import annotations

from fastapi import APIRouter, Header

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.core.dependencies import current_actor_id
from crm.database.db import get_db_session
from crm.schemas.board import BoardColumnResponse, BoardMoveRequest
from crm.services.board_service import BoardService

router = APIRouter(prefix="/board", tags=["board"])


@router.get("")
def get_board(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["board.read"])
    with get_db_session() as session:
        columns = BoardService(db=session).board()
        return {"columns": [BoardColumnResponse.model_validate(column).model_dump() for column in columns]}


@router.post("/move")
def move_card(payload: BoardMoveRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = require_auth(authorization, scopes=["board.move"])
    with get_db_session() as session, service_errors():
        service = BoardService(db=session)
        entry = service.move(payload.customer_id, payload.pipeline_stage_id, actor_user_id=current_actor_id(user))
        return {
            "customer_id": payload.customer_id,
            "pipeline_stage_id": entry.pipeline_stage_id,
            "notifications": drain_notifications(service.notifier),
        }
