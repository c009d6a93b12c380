"""Wallet REST API: 3 read-only endpoints, all require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.application.service import AccountApplicationService
from src.pd_common.database import get_db_session
from src.pd_common.enums import TransactionType
from src.pd_common.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.pd_common.response import ApiResponse, success_response
from src.pd_gateway.auth.dependencies import get_current_user
from src.pd_gateway.user.db_models import UserModel

router = APIRouter(prefix="/wallet", tags=["wallet"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, str(current_user.id))
    resp = success_response(data.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/transactions")
async def list_transactions(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    entry_type: TransactionType | None = Query(None, alias="type", description="Filter by kind"),
) -> ApiResponse:
    data = await _service.list_transactions(
        db,
        str(current_user.id),
        cursor,
        limit,
        entry_type.value if entry_type else None,
    )
    resp = success_response(data.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/locked-balance")
async def get_locked_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_locked_balance(db, str(current_user.id))
    resp = success_response(data.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
