"""Player bet history: "my bets", split into open and settled."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.application.schemas import BetGroup
from src.sb_bet.application.service import BetQueryService
from src.sb_common.database import get_db_session
from src.sb_common.response import ApiResponse, respond
from src.sb_gateway.auth.dependencies import get_current_principal
from src.sb_gateway.auth.principal import Principal

router = APIRouter(prefix="/bets", tags=["bets"])

_service = BetQueryService()


@router.get("")
async def list_my_bets(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    group: BetGroup = Query(BetGroup.ALL, description="open | settled | all"),
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_for_user(db, principal, group, cursor, limit)
    return respond(request, data.model_dump())


@router.get("/{bet_id}")
async def get_my_bet(
    bet_id: uuid.UUID,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_for_user(db, principal, str(bet_id))
    return respond(request, data.model_dump())
