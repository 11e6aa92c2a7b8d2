"""OddsFeedService: Redis-cached read-through over the odds feed client."""

import logging

import redis.asyncio as aioredis

from config.settings import settings
from src.sb_common.enums import MarketKind, Outcome
from src.sb_common.redis_client import cache_get_json, cache_set_json
from src.sb_odds.domain.feed import Game, selection_from_game
from src.sb_odds.domain.models import Selection
from src.sb_odds.infrastructure.feed_client import OddsFeedClient

logger = logging.getLogger(__name__)

DEFAULT_SPORT = "basketball_nba"
DEFAULT_REGIONS = "us"
DEFAULT_MARKETS = "h2h,spreads,totals"


def _cache_key(sport: str, regions: str, markets: str) -> str:
    return f"odds:{sport}:{regions}:{markets}"


class OddsFeedService:
    def __init__(self, client: OddsFeedClient | None = None) -> None:
        self._client = client or OddsFeedClient()

    async def get_games(
        self,
        redis: aioredis.Redis,
        sport: str = DEFAULT_SPORT,
        regions: str = DEFAULT_REGIONS,
        markets: str = DEFAULT_MARKETS,
    ) -> list[Game]:
        key = _cache_key(sport, regions, markets)
        cached = await cache_get_json(redis, key)
        if cached is not None:
            return [Game.from_dict(g) for g in cached]

        games = await self._client.fetch_games(sport, regions, markets)
        await cache_set_json(
            redis, key, [g.to_dict() for g in games], settings.ODDS_CACHE_TTL_SECONDS
        )
        logger.info("Cached %d games for %s", len(games), key)
        return games

    async def quote_selection(
        self,
        redis: aioredis.Redis,
        sport: str,
        event_id: str,
        market: MarketKind,
        outcome: Outcome,
    ) -> Selection | None:
        """Current price for one leg, or None if the event is not on the board."""
        for game in await self.get_games(redis, sport):
            if game.id == event_id:
                return selection_from_game(game, market, outcome)
        return None
