"""Admin REST API: bet review, settlement and balance adjustment."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_admin.application.schemas import AdjustRequest, SettleRequest
from src.sb_admin.application.service import AdminConsoleService
from src.sb_common.database import get_db_session
from src.sb_common.enums import BetStatus
from src.sb_common.response import ApiResponse, respond
from src.sb_gateway.auth.dependencies import get_current_principal
from src.sb_gateway.auth.principal import Principal

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminConsoleService()


@router.get("/bets")
async def list_bets(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    status: BetStatus | None = Query(None, description="Filter by bet status"),
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    data = await _service.list_bets(db, principal, status, cursor, limit)
    return respond(request, data.model_dump())


@router.post("/bets/{bet_id}/approve")
async def approve_bet(
    bet_id: uuid.UUID,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.approve(db, principal, str(bet_id))
    return respond(request, data.model_dump(), "Bet approved")


@router.post("/bets/{bet_id}/reject")
async def reject_bet(
    bet_id: uuid.UUID,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.reject(db, principal, str(bet_id))
    return respond(request, data.model_dump(), "Bet rejected, stake refunded")


@router.post("/bets/{bet_id}/settle")
async def settle_bet(
    bet_id: uuid.UUID,
    body: SettleRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.settle(
        db, principal, str(bet_id), body.status, body.payout_override()
    )
    return respond(request, data.model_dump(), f"Bet settled as {body.status.value}")


@router.get("/users")
async def search_users(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    email: str = Query(..., min_length=3, description="Exact email, case-insensitive"),
) -> ApiResponse:
    users = await _service.search_users(db, principal, email)
    return respond(request, {"users": [u.model_dump() for u in users]})


@router.post("/users/{user_id}/adjust")
async def adjust_balance(
    user_id: uuid.UUID,
    body: AdjustRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.adjust_balance(
        db, principal, str(user_id), body.money, body.kind, body.note
    )
    return respond(request, data.model_dump(), "Balance adjusted")
