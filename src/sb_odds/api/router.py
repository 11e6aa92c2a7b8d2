"""Odds board REST API: public, read-only."""

from dataclasses import asdict

from fastapi import APIRouter, Query, Request

from src.sb_common.enums import MarketKind, Outcome
from src.sb_common.errors import EventNotOnBoardError
from src.sb_common.redis_client import get_redis
from src.sb_common.response import ApiResponse, respond
from src.sb_odds.application.service import DEFAULT_MARKETS, DEFAULT_REGIONS, OddsFeedService
from src.sb_odds.domain.odds import format_odds

router = APIRouter(prefix="/odds", tags=["odds"])

_service = OddsFeedService()


@router.get("/{sport}")
async def get_odds(
    sport: str,
    request: Request,
    regions: str = Query(DEFAULT_REGIONS, description="Bookmaker regions, e.g. us,uk"),
    markets: str = Query(DEFAULT_MARKETS, description="Comma list of h2h,spreads,totals"),
) -> ApiResponse:
    games = await _service.get_games(await get_redis(), sport, regions, markets)
    return respond(request, {"games": [g.to_dict() for g in games], "count": len(games)})


@router.get("/{sport}/{event_id}/{market}/{outcome}")
async def get_selection(
    sport: str,
    event_id: str,
    market: MarketKind,
    outcome: Outcome,
    request: Request,
) -> ApiResponse:
    """Snapshot one leg's current price, ready to be toggled onto a slip."""
    selection = await _service.quote_selection(await get_redis(), sport, event_id, market, outcome)
    if selection is None:
        raise EventNotOnBoardError(event_id)
    data = asdict(selection)
    data["odds_display"] = format_odds(selection.odds)
    return respond(request, data)
