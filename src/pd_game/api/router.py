"""Game REST API: play (JWT), watch (public), history and stats (JWT)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_common.database import get_db_session
from src.pd_common.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.pd_common.response import ApiResponse, success_response
from src.pd_game.application.schemas import PlayRequest
from src.pd_game.application.service import GameApplicationService
from src.pd_gateway.auth.dependencies import get_current_user
from src.pd_gateway.user.db_models import UserModel

router = APIRouter(prefix="/game", tags=["game"])

_service = GameApplicationService()


def _get_request_id(request: Request, fallback: str) -> str:
    return getattr(request.state, "request_id", fallback)


@router.post("/play")
async def play(
    body: PlayRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.play_wager(
        db, str(current_user.id), body.bet_amount, body.prediction
    )
    resp = success_response(data.to_wire(), message=data.message)
    resp.request_id = _get_request_id(request, resp.request_id)
    return resp


@router.post("/watch")
async def watch(request: Request) -> ApiResponse:
    data = _service.watch()
    resp = success_response(data.to_wire(), message=data.message)
    resp.request_id = _get_request_id(request, resp.request_id)
    return resp


@router.get("/history")
async def history(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
) -> ApiResponse:
    data = await _service.history(db, str(current_user.id), cursor, limit)
    resp = success_response(data.to_wire())
    resp.request_id = _get_request_id(request, resp.request_id)
    return resp


@router.get("/stats")
async def stats(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.stats(db, str(current_user.id))
    resp = success_response(data.to_wire())
    resp.request_id = _get_request_id(request, resp.request_id)
    return resp
