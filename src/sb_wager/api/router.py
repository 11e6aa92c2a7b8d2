"""Bet slip REST API: payout preview and submission."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_common.database import get_db_session
from src.sb_common.response import ApiResponse, respond
from src.sb_gateway.auth.dependencies import get_optional_principal
from src.sb_gateway.auth.principal import Principal
from src.sb_wager.application.schemas import SlipRequest, SubmitResponse
from src.sb_wager.application.service import WagerSubmissionService

router = APIRouter(prefix="/bets", tags=["bets"])

_service = WagerSubmissionService()


@router.post("/quote")
async def quote_slip(body: SlipRequest, request: Request) -> ApiResponse:
    data = _service.quote(
        body.mode, body.to_selection_set(), body.currency, body.stake, body.leg_stakes()
    )
    return respond(request, data.model_dump())


@router.post("", status_code=201)
async def submit_slip(
    body: SlipRequest,
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    bet_ids = await _service.submit(
        db,
        principal,
        body.mode,
        body.to_selection_set(),
        body.currency,
        stake=body.stake,
        leg_stakes=body.leg_stakes(),
    )
    return respond(request, SubmitResponse(bet_ids=bet_ids).model_dump(), "Bets placed")
