"""sb_account REST API: read-only balance and transaction history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.application.service import AccountApplicationService
from src.sb_common.database import get_db_session
from src.sb_common.enums import TransactionKind
from src.sb_common.response import ApiResponse, respond
from src.sb_gateway.auth.dependencies import get_current_principal
from src.sb_gateway.auth.principal import Principal

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, principal)
    return respond(request, data.model_dump())


@router.get("/transactions")
async def list_transactions(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    kind: TransactionKind | None = Query(None, description="Filter by transaction kind"),
) -> ApiResponse:
    data = await _service.list_transactions(
        db, principal, cursor, limit, kind.value if kind else None
    )
    return respond(request, data.model_dump())
