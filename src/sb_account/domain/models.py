"""Domain models for sb_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.sb_common.enums import Currency
from src.sb_common.money import Money


@dataclass
class Account:
    user_id: str
    balance_usd: int   # cents
    balance_btc: int   # satoshis
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def balance(self, currency: Currency) -> Money:
        return Money(currency, self.balance_usd if currency is Currency.USD else self.balance_btc)


@dataclass
class AccountProfile:
    """Account joined with its user, for admin search."""

    user_id: str
    email: str
    display_name: str | None
    balance_usd: int
    balance_btc: int


@dataclass
class Transaction:
    id: int                        # BIGSERIAL
    user_id: str
    kind: str                      # TransactionKind value
    amount_usd: int                # signed cents, 0 when BTC
    amount_btc: int                # signed satoshis, 0 when USD
    bet_id: str | None = None
    note: str | None = None
    created_at: datetime | None = None

    @property
    def amount(self) -> Money:
        if self.amount_btc != 0:
            return Money.btc(self.amount_btc)
        return Money.usd(self.amount_usd)
