"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.sb_account.api.router import router as account_router
from src.sb_admin.api.router import router as admin_router
from src.sb_bet.api.router import router as bet_router
from src.sb_common.database import engine
from src.sb_common.errors import AppError, PartialSubmissionError
from src.sb_common.redis_client import close_redis, get_redis
from src.sb_common.response import error_response
from src.sb_gateway.api.router import router as auth_router
from src.sb_gateway.middleware.request_log import RequestLogMiddleware
from src.sb_odds.api.router import router as odds_router
from src.sb_wager.api.router import router as wager_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    data = None
    if isinstance(exc, PartialSubmissionError):
        data = {
            "placed_bet_ids": exc.placed_bet_ids,
            "failed_leg": exc.failed_leg,
            "cause_code": exc.cause.code,
        }
    resp = error_response(exc.code, exc.message, data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(odds_router, prefix="/api/v1")
app.include_router(wager_router, prefix="/api/v1")
app.include_router(bet_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
