"""American (quoted) odds → decimal multiplier.

This module is the only place the conversion is implemented. Decimal is
used throughout so payouts are exact until the single rounding step at
persistence time.
"""

from decimal import ROUND_HALF_UP, Decimal

from src.sb_common.errors import InvalidOddsError

_HUNDRED = Decimal(100)
_ONE = Decimal(1)
_TWO = Decimal(2)


def validate_odds(quoted_odds: int) -> None:
    """Quoted odds must be a non-zero integer."""
    if isinstance(quoted_odds, bool) or not isinstance(quoted_odds, int) or quoted_odds == 0:
        raise InvalidOddsError(quoted_odds)


def to_decimal_multiplier(quoted_odds: int) -> Decimal:
    """Total return per unit staked: +150 → 2.5, -150 → 1.6667, +100 → 2.0."""
    validate_odds(quoted_odds)
    if quoted_odds > 0:
        return Decimal(quoted_odds) / _HUNDRED + _ONE
    return _HUNDRED / Decimal(abs(quoted_odds)) + _ONE


def to_american(multiplier: Decimal) -> int:
    """Decimal multiplier back to quoted odds, for displaying combined parlay prices.

    2.5 → +150, 1.5 → -200. Multipliers at or below 1.0 have no quote.
    """
    if multiplier <= _ONE:
        raise ValueError(f"Multiplier must be greater than 1, got {multiplier}")
    if multiplier >= _TWO:
        value = (multiplier - _ONE) * _HUNDRED
    else:
        value = -_HUNDRED / (multiplier - _ONE)
    return int(value.quantize(_ONE, rounding=ROUND_HALF_UP))


def format_odds(quoted_odds: int) -> str:
    """+120 / -150 display form."""
    return f"+{quoted_odds}" if quoted_odds > 0 else str(quoted_odds)
