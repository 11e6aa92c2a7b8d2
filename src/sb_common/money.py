"""Integer minor-unit money for the two supported denominations.

All stakes, payouts and balances are int minor units: cents for USD,
satoshis for BTC. Rounding a computed payout to minor units is the same as
rounding USD to 2 decimal places and BTC to 8.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from src.sb_common.enums import Currency

DECIMAL_PLACES: dict[Currency, int] = {Currency.USD: 2, Currency.BTC: 8}
MINOR_PER_MAJOR: dict[Currency, int] = {
    currency: 10**places for currency, places in DECIMAL_PLACES.items()
}
_SYMBOLS: dict[Currency, str] = {Currency.USD: "$", Currency.BTC: "₿"}


@dataclass(frozen=True)
class Money:
    """Tagged amount: USD(cents) | BTC(satoshis)."""

    currency: Currency
    amount: int

    @classmethod
    def usd(cls, cents: int) -> "Money":
        return cls(Currency.USD, cents)

    @classmethod
    def btc(cls, sats: int) -> "Money":
        return cls(Currency.BTC, sats)

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        return cls(currency, 0)

    def to_columns(self) -> tuple[int, int]:
        """Storage boundary: (usd, btc) pair with the other side zero."""
        if self.currency is Currency.USD:
            return self.amount, 0
        return 0, self.amount

    @classmethod
    def from_columns(cls, usd: int, btc: int) -> "Money":
        """Inverse of to_columns for a stake pair; exactly one side must be > 0."""
        if (usd > 0) == (btc > 0):
            raise ValueError(f"Exactly one currency must be populated, got usd={usd} btc={btc}")
        return cls.usd(usd) if usd > 0 else cls.btc(btc)

    def pick(self, usd: int, btc: int) -> "Money":
        """Select the column of a (usd, btc) pair that matches this currency."""
        return Money(self.currency, usd if self.currency is Currency.USD else btc)

    def __neg__(self) -> "Money":
        return Money(self.currency, -self.amount)

    def display(self) -> str:
        return to_display(self)


def round_to_minor(value: Decimal) -> int:
    """Round a minor-unit Decimal half-up to a whole number of minor units."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_display(money: Money) -> str:
    """Money to display string: $83.33, -$12.00, ₿0.00100000."""
    places = DECIMAL_PLACES[money.currency]
    per_major = MINOR_PER_MAJOR[money.currency]
    sign = "-" if money.amount < 0 else ""
    whole, frac = divmod(abs(money.amount), per_major)
    return f"{sign}{_SYMBOLS[money.currency]}{whole:,}.{frac:0{places}d}"
