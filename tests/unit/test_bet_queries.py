"""Unit tests for BetQueryService and bet read schemas."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sb_bet.application.schemas import BetGroup, BetItem, combined_odds
from src.sb_bet.application.service import BetQueryService
from src.sb_bet.domain.models import Bet, BetSelection
from src.sb_common.enums import BetStatus, BetType, MarketKind, Outcome
from src.sb_common.errors import BetNotFoundError
from src.sb_common.money import Money
from src.sb_common.pagination import ts_cursor_decode
from src.sb_gateway.auth.principal import Principal

PLAYER = Principal(user_id="user-1")


def _leg(odds: int, event_id: str = "evt") -> BetSelection:
    return BetSelection(event_id, MarketKind.MONEYLINE, Outcome.HOME, odds)


def _bet(bet_id: str = "bet-1", user_id: str = "user-1", legs: int = 1) -> Bet:
    odds = [120, -200, 150]
    return Bet(
        id=bet_id,
        user_id=user_id,
        bet_type=BetType.PARLAY if legs > 1 else BetType.SINGLE,
        status=BetStatus.PENDING,
        stake=Money.usd(2000),
        potential_payout=Money.usd(6600),
        selections=[_leg(o, f"evt-{i}") for i, o in enumerate(odds[:legs])],
        created_at=datetime(2026, 10, 1, tzinfo=UTC),
    )


class TestCombinedOdds:
    def test_single_uses_leg_odds(self) -> None:
        assert combined_odds([_leg(-150)]) == -150

    def test_parlay_product(self) -> None:
        assert combined_odds([_leg(120, "a"), _leg(-200, "b")]) == 230

    def test_no_legs(self) -> None:
        assert combined_odds([]) is None


class TestBetItem:
    def test_parlay_item(self) -> None:
        item = BetItem.from_domain(_bet(legs=2))
        assert item.bet_type == "parlay"
        assert item.currency == "USD"
        assert item.potential_payout_display == "$66.00"
        assert item.odds_display == "+230"
        assert item.payout is None
        assert [s.odds_display for s in item.selections] == ["+120", "-200"]


class TestListForUser:
    async def test_open_group_filters_statuses(self) -> None:
        repo = AsyncMock()
        repo.list_bets.return_value = [_bet()]
        svc = BetQueryService(repo=repo)
        db = MagicMock()

        page = await svc.list_for_user(db, PLAYER, BetGroup.OPEN, None, 20)

        args = repo.list_bets.await_args.args
        assert args[1] == "user-1"
        assert set(args[2]) == {BetStatus.PENDING, BetStatus.APPROVED}
        assert args[5] == 21
        assert page.has_more is False

    async def test_all_group_has_no_status_filter(self) -> None:
        repo = AsyncMock()
        repo.list_bets.return_value = [_bet("b1"), _bet("b2")]
        svc = BetQueryService(repo=repo)

        page = await svc.list_for_user(MagicMock(), PLAYER, BetGroup.ALL, None, 1)

        assert repo.list_bets.await_args.args[2] is None
        assert page.has_more is True
        ts, last_id = ts_cursor_decode(page.next_cursor)
        assert ts == datetime(2026, 10, 1, tzinfo=UTC)
        assert last_id == "b1"


class TestGetForUser:
    async def test_other_users_bet_is_not_found(self) -> None:
        repo = AsyncMock()
        repo.get_bet.return_value = _bet(user_id="someone-else")
        svc = BetQueryService(repo=repo)

        with pytest.raises(BetNotFoundError):
            await svc.get_for_user(MagicMock(), PLAYER, "bet-1")

    async def test_own_bet(self) -> None:
        repo = AsyncMock()
        repo.get_bet.return_value = _bet()
        svc = BetQueryService(repo=repo)

        item = await svc.get_for_user(MagicMock(), PLAYER, "bet-1")
        assert item.id == "bet-1"
