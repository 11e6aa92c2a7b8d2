"""WagerSubmissionService: turns a selection set plus stake into placed bets.

Validation happens before any ledger call:
  1. the principal must be authenticated
  2. single mode needs at least one leg with a positive stake;
     parlay mode needs two or more active legs and a positive shared stake

Single mode places one independent bet per staked leg, each in its own
ledger unit. There is no batch atomicity: when leg k fails, legs before it
stay placed and PartialSubmissionError reports them. Placed legs are
deactivated in the slip so a resubmission does not place them twice.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.domain.models import BetSelection
from src.sb_common.enums import BetType, Currency
from src.sb_common.errors import (
    AppError,
    InvalidParlayError,
    NoStakeEnteredError,
    PartialSubmissionError,
)
from src.sb_common.money import Money, round_to_minor, to_display
from src.sb_gateway.auth.principal import Principal, require_authenticated
from src.sb_ledger.domain.ledger import Ledger
from src.sb_odds.domain.models import LegKey, Selection
from src.sb_odds.domain.odds import format_odds, to_american
from src.sb_odds.domain.payout import parlay_combined_decimal, parlay_payout, single_payout
from src.sb_odds.domain.selection_set import SelectionSet
from src.sb_wager.application.schemas import LegQuote, QuoteResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PlannedBet:
    bet_type: BetType
    legs: tuple[Selection, ...]
    stake: Money
    potential_payout: Money

    @property
    def label(self) -> str:
        return ",".join(str(leg.key) for leg in self.legs)


def _plan_singles(
    slip: SelectionSet, currency: Currency, stake: int, leg_stakes: Mapping[LegKey, int] | None
) -> list[_PlannedBet]:
    planned = []
    for leg in slip.active_legs():
        leg_stake = leg_stakes.get(leg.key, 0) if leg_stakes is not None else stake
        if leg_stake <= 0:
            continue
        planned.append(
            _PlannedBet(
                BetType.SINGLE,
                (leg,),
                Money(currency, leg_stake),
                Money(currency, round_to_minor(single_payout(leg.odds, leg_stake))),
            )
        )
    if not planned:
        raise NoStakeEnteredError()
    return planned


def _plan_parlay(slip: SelectionSet, currency: Currency, stake: int) -> _PlannedBet:
    legs = tuple(slip.active_legs())
    if len(legs) < 2:
        raise InvalidParlayError(f"needs at least 2 active legs, got {len(legs)}")
    if stake <= 0:
        raise InvalidParlayError("stake must be positive")
    return _PlannedBet(
        BetType.PARLAY,
        legs,
        Money(currency, stake),
        Money(currency, round_to_minor(parlay_payout(legs, stake))),
    )


class WagerSubmissionService:
    def __init__(self, ledger: Ledger | None = None) -> None:
        self._ledger = ledger or Ledger()

    async def submit(
        self,
        db: AsyncSession,
        principal: Principal | None,
        mode: BetType,
        slip: SelectionSet,
        currency: Currency,
        stake: int = 0,
        leg_stakes: Mapping[LegKey, int] | None = None,
    ) -> list[str]:
        """Place the slip. Returns the new bet ids; clears the slip on full success.

        In single mode `leg_stakes` gives each leg its own stake; without it
        every active leg is staked `stake`. Parlay mode uses `stake` only.
        """
        principal = require_authenticated(principal)
        if mode is BetType.SINGLE:
            planned = _plan_singles(slip, currency, stake, leg_stakes)
        else:
            planned = [_plan_parlay(slip, currency, stake)]

        placed: list[str] = []
        for plan in planned:
            try:
                bet = await self._ledger.place_bet(
                    db,
                    principal,
                    plan.bet_type,
                    plan.stake,
                    plan.potential_payout,
                    [BetSelection.from_selection(leg) for leg in plan.legs],
                )
            except AppError as e:
                if not placed:
                    raise
                logger.warning(
                    "Submission for %s stopped at %s after %d bet(s): %s",
                    principal.user_id, plan.label, len(placed), e.message,
                )
                raise PartialSubmissionError(placed, plan.label, e) from e
            placed.append(bet.id)
            if mode is BetType.SINGLE:
                slip.remove(plan.legs[0].key)

        slip.clear()
        return placed

    def quote(
        self,
        mode: BetType,
        slip: SelectionSet,
        currency: Currency,
        stake: int = 0,
        leg_stakes: Mapping[LegKey, int] | None = None,
    ) -> QuoteResponse:
        """Payout preview. Never touches the ledger; zero stakes quote zero."""
        legs = list(slip.active_legs())
        leg_quotes: list[LegQuote] = []
        for leg in legs:
            if mode is BetType.PARLAY:
                leg_stake = 0
            elif leg_stakes is not None:
                leg_stake = leg_stakes.get(leg.key, 0)
            else:
                leg_stake = stake
            payout = Money(currency, round_to_minor(single_payout(leg.odds, leg_stake)))
            leg_quotes.append(
                LegQuote(
                    key=str(leg.key),
                    odds=leg.odds,
                    odds_display=format_odds(leg.odds),
                    stake=leg_stake,
                    potential_payout=payout.amount,
                    potential_payout_display=to_display(payout),
                )
            )

        combined: int | None = None
        if mode is BetType.PARLAY:
            total_stake = Money(currency, stake)
            total_payout = Money(currency, round_to_minor(parlay_payout(legs, stake)))
            if len(legs) >= 2:
                combined = to_american(parlay_combined_decimal(legs))
        else:
            total_stake = Money(currency, sum(q.stake for q in leg_quotes))
            total_payout = Money(currency, sum(q.potential_payout for q in leg_quotes))

        return QuoteResponse(
            mode=mode.value,
            inferred_mode=slip.inferred_mode.value,
            currency=currency.value,
            legs=leg_quotes,
            combined_odds=combined,
            combined_odds_display=format_odds(combined) if combined is not None else None,
            total_stake=total_stake.amount,
            total_stake_display=to_display(total_stake),
            potential_payout=total_payout.amount,
            potential_payout_display=to_display(total_payout),
        )
