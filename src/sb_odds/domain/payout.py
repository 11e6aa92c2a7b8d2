"""Potential payout arithmetic for single legs and parlays.

Results are unrounded Decimals in whatever unit the stake was given in;
callers round once with sb_common.money.round_to_minor when persisting.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from functools import reduce

from src.sb_common.errors import InsufficientLegsError
from src.sb_odds.domain.models import Selection
from src.sb_odds.domain.odds import to_decimal_multiplier

_ZERO = Decimal(0)


def single_payout(odds: int, stake: int | Decimal) -> Decimal:
    if stake == 0:
        return _ZERO
    return Decimal(stake) * to_decimal_multiplier(odds)


def parlay_combined_decimal(legs: Iterable[Selection]) -> Decimal:
    legs = list(legs)
    if len(legs) < 2:
        raise InsufficientLegsError(len(legs))
    return reduce(
        lambda acc, leg: acc * to_decimal_multiplier(leg.odds), legs, Decimal(1)
    )


def parlay_payout(legs: Sequence[Selection], stake: int | Decimal) -> Decimal:
    if stake == 0 or len(legs) < 2:
        return _ZERO
    return Decimal(stake) * parlay_combined_decimal(legs)
