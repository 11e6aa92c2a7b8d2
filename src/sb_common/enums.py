"""Global enums: values must match DB CHECK constraints exactly."""

from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    BTC = "BTC"


class BetType(str, Enum):
    SINGLE = "single"
    PARLAY = "parlay"


class BetStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    WON = "won"
    LOST = "lost"
    VOID = "void"


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    BET_STAKE = "bet_stake"
    BET_PAYOUT = "bet_payout"
    ADJUSTMENT = "adjustment"


class MarketKind(str, Enum):
    MONEYLINE = "moneyline"
    SPREAD = "spread"
    TOTAL = "total"


class Outcome(str, Enum):
    HOME = "home"
    AWAY = "away"
    DRAW = "draw"
    OVER = "over"
    UNDER = "under"


class SettlementOutcome(str, Enum):
    WON = "won"
    LOST = "lost"
    VOID = "void"


class Capability(str, Enum):
    ADMIN = "admin"
