"""Pydantic schemas for sb_account API."""

from pydantic import BaseModel

from src.sb_account.domain.models import Account, Transaction
from src.sb_common.enums import Currency
from src.sb_common.money import to_display


class BalanceResponse(BaseModel):
    user_id: str
    balance_usd: int
    balance_usd_display: str
    balance_btc: int
    balance_btc_display: str

    @classmethod
    def from_account(cls, account: Account) -> "BalanceResponse":
        return cls(
            user_id=account.user_id,
            balance_usd=account.balance_usd,
            balance_usd_display=to_display(account.balance(Currency.USD)),
            balance_btc=account.balance_btc,
            balance_btc_display=to_display(account.balance(Currency.BTC)),
        )


class TransactionItem(BaseModel):
    id: int
    kind: str
    currency: str
    amount: int
    amount_display: str
    bet_id: str | None
    note: str | None
    created_at: str

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionItem":
        money = txn.amount
        return cls(
            id=txn.id,
            kind=txn.kind,
            currency=money.currency.value,
            amount=money.amount,
            amount_display=to_display(money),
            bet_id=txn.bet_id,
            note=txn.note,
            created_at=txn.created_at.isoformat() if txn.created_at else "",
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool
