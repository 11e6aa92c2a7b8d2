"""Request/response schemas for the admin console."""

from pydantic import BaseModel, Field, model_validator

from src.sb_account.domain.models import AccountProfile
from src.sb_common.enums import Currency, SettlementOutcome, TransactionKind
from src.sb_common.money import Money, to_display


class SettleRequest(BaseModel):
    status: SettlementOutcome
    payout_usd: int | None = Field(None, ge=0, description="Override payout in cents (won only)")
    payout_btc: int | None = Field(None, ge=0, description="Override payout in satoshis (won only)")

    @model_validator(mode="after")
    def _one_override(self) -> "SettleRequest":
        if self.payout_usd is not None and self.payout_btc is not None:
            raise ValueError("give at most one of payout_usd / payout_btc")
        return self

    def payout_override(self) -> Money | None:
        if self.payout_usd is not None:
            return Money.usd(self.payout_usd)
        if self.payout_btc is not None:
            return Money.btc(self.payout_btc)
        return None


class AdjustRequest(BaseModel):
    currency: Currency
    amount: int = Field(..., description="Minor units; signed for kind=adjustment")
    kind: TransactionKind = TransactionKind.ADJUSTMENT
    note: str = Field("", max_length=500)

    @property
    def money(self) -> Money:
        return Money(self.currency, self.amount)


class UserSummary(BaseModel):
    user_id: str
    email: str
    display_name: str | None
    balance_usd: int
    balance_usd_display: str
    balance_btc: int
    balance_btc_display: str

    @classmethod
    def from_profile(cls, profile: AccountProfile) -> "UserSummary":
        return cls(
            user_id=profile.user_id,
            email=profile.email,
            display_name=profile.display_name,
            balance_usd=profile.balance_usd,
            balance_usd_display=to_display(Money.usd(profile.balance_usd)),
            balance_btc=profile.balance_btc,
            balance_btc_display=to_display(Money.btc(profile.balance_btc)),
        )
