"""Bet status transitions.

    pending  -> approved | rejected
    approved -> won | lost | void
    rejected, won, lost, void are terminal.

Every BetStatus must have a row in TRANSITIONS; a missing row fails at import.
"""

from enum import Enum

from src.sb_common.enums import BetStatus, SettlementOutcome
from src.sb_common.errors import AlreadySettledError, InvalidTransitionError

TRANSITIONS: dict[BetStatus, frozenset[BetStatus]] = {
    BetStatus.PENDING: frozenset({BetStatus.APPROVED, BetStatus.REJECTED}),
    BetStatus.APPROVED: frozenset({BetStatus.WON, BetStatus.LOST, BetStatus.VOID}),
    BetStatus.REJECTED: frozenset(),
    BetStatus.WON: frozenset(),
    BetStatus.LOST: frozenset(),
    BetStatus.VOID: frozenset(),
}

_missing = set(BetStatus) - set(TRANSITIONS)
if _missing:
    raise RuntimeError(f"No transition row for: {sorted(s.value for s in _missing)}")

TERMINAL_STATUSES: frozenset[BetStatus] = frozenset(
    status for status, targets in TRANSITIONS.items() if not targets
)
# Reporting groups.
OPEN_STATUSES: frozenset[BetStatus] = frozenset({BetStatus.PENDING, BetStatus.APPROVED})
SETTLED_STATUSES: frozenset[BetStatus] = frozenset({BetStatus.WON, BetStatus.LOST})


class LedgerEffect(str, Enum):
    NONE = "none"
    REFUND_STAKE = "refund_stake"
    CREDIT_PAYOUT = "credit_payout"


LEDGER_EFFECTS: dict[BetStatus, LedgerEffect] = {
    BetStatus.APPROVED: LedgerEffect.NONE,
    BetStatus.REJECTED: LedgerEffect.REFUND_STAKE,
    BetStatus.WON: LedgerEffect.CREDIT_PAYOUT,
    BetStatus.LOST: LedgerEffect.NONE,
    BetStatus.VOID: LedgerEffect.REFUND_STAKE,
}

SETTLEMENT_TARGETS: dict[SettlementOutcome, BetStatus] = {
    SettlementOutcome.WON: BetStatus.WON,
    SettlementOutcome.LOST: BetStatus.LOST,
    SettlementOutcome.VOID: BetStatus.VOID,
}


def is_terminal(status: BetStatus) -> bool:
    return status in TERMINAL_STATUSES


def check_transition(bet_id: str, current: BetStatus, target: BetStatus) -> None:
    """Raise unless current -> target is in the table.

    A bet already in a terminal status raises AlreadySettledError, so a
    retried settlement fails cleanly instead of crediting twice.
    """
    if is_terminal(current):
        raise AlreadySettledError(bet_id, current.value, target.value)
    if target not in TRANSITIONS[current]:
        raise InvalidTransitionError(bet_id, current.value, target.value)
