"""Ledger: the only writer of balances, bets and transactions.

Each public operation is one atomic unit (`unit_of_work`): every effect
commits together or the whole unit rolls back. Balance changes go through
AccountRepository.apply_delta, whose row lock serializes concurrent
operations on the same user.

Every balance mutation writes exactly one transactions row.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.domain.models import Account
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_account.infrastructure.persistence import AccountRepository
from src.sb_bet.domain.models import Bet, BetDraft, BetSelection
from src.sb_bet.domain.repository import BetRepositoryProtocol
from src.sb_bet.domain.state_machine import (
    LEDGER_EFFECTS,
    SETTLEMENT_TARGETS,
    LedgerEffect,
    check_transition,
)
from src.sb_bet.infrastructure.persistence import BetRepository
from src.sb_common.database import unit_of_work
from src.sb_common.enums import (
    BetStatus,
    BetType,
    Capability,
    SettlementOutcome,
    TransactionKind,
)
from src.sb_common.errors import (
    AccountNotFoundError,
    BetNotFoundError,
    InsufficientFundsError,
    InvalidAdjustmentError,
    InvalidTransitionError,
    NegativeResultingBalanceError,
    PayoutCurrencyMismatchError,
)
from src.sb_common.money import Money
from src.sb_gateway.auth.authorizer import Authorizer, RoleAuthorizer, require_capability
from src.sb_gateway.auth.principal import Principal, require_authenticated

logger = logging.getLogger(__name__)

ADJUSTABLE_KINDS = frozenset(
    {TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL, TransactionKind.ADJUSTMENT}
)


class Ledger:
    def __init__(
        self,
        account_repo: AccountRepositoryProtocol | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
        authorizer: Authorizer | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._authorizer: Authorizer = authorizer or RoleAuthorizer()

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    async def place_bet(
        self,
        db: AsyncSession,
        principal: Principal | None,
        bet_type: BetType,
        stake: Money,
        potential_payout: Money,
        selections: Sequence[BetSelection],
    ) -> Bet:
        """Debit the stake, insert bet + legs, record the bet_stake transaction.

        InsufficientFundsError leaves balance, bets and transactions untouched.
        """
        principal = require_authenticated(principal)
        draft = BetDraft(
            user_id=principal.user_id,
            bet_type=bet_type,
            stake=stake,
            potential_payout=potential_payout,
            selections=tuple(selections),
        )
        async with unit_of_work(db):
            account = await self._accounts.apply_delta(db, principal.user_id, -stake)
            if account is None:
                existing = await self._require_account(db, principal.user_id)
                raise InsufficientFundsError(
                    stake.currency.value, stake.amount, existing.balance(stake.currency).amount
                )
            bet = await self._bets.insert_bet(db, draft)
            await self._accounts.insert_transaction(
                db,
                principal.user_id,
                TransactionKind.BET_STAKE,
                -stake,
                note=f"Stake on {bet_type.value} bet",
                bet_id=bet.id,
            )

        logger.info(
            "Bet placed: id=%s user=%s type=%s stake=%s legs=%d",
            bet.id, principal.user_id, bet_type.value, stake.display(), len(draft.selections),
        )
        return bet

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def approve(self, db: AsyncSession, principal: Principal | None, bet_id: str) -> Bet:
        return await self.transition(db, principal, bet_id, BetStatus.APPROVED)

    async def reject(self, db: AsyncSession, principal: Principal | None, bet_id: str) -> Bet:
        """Reject a pending bet and refund exactly its stake."""
        return await self.transition(db, principal, bet_id, BetStatus.REJECTED)

    async def settle(
        self,
        db: AsyncSession,
        principal: Principal | None,
        bet_id: str,
        outcome: SettlementOutcome,
        payout: Money | None = None,
    ) -> Bet:
        """Settle an approved bet.

        won credits `payout` (default: the stored potential payout), lost
        credits nothing, void refunds the stake. The override only applies
        to won.
        """
        return await self.transition(
            db, principal, bet_id, SETTLEMENT_TARGETS[outcome], payout_override=payout
        )

    async def transition(
        self,
        db: AsyncSession,
        principal: Principal | None,
        bet_id: str,
        target: BetStatus,
        payout_override: Money | None = None,
    ) -> Bet:
        principal = await require_capability(self._authorizer, db, principal, Capability.ADMIN)

        async with unit_of_work(db):
            bet = await self._bets.get_bet(db, bet_id, for_update=True)
            if bet is None:
                raise BetNotFoundError(bet_id)
            check_transition(bet_id, bet.status, target)

            credit, kind = self._credit_for(bet, target, payout_override)
            if not await self._bets.update_status(db, bet_id, bet.status, target, credit):
                raise InvalidTransitionError(bet_id, bet.status.value, target.value)

            if credit is not None and credit.amount > 0:
                account = await self._accounts.apply_delta(db, bet.user_id, credit)
                if account is None:
                    raise AccountNotFoundError(bet.user_id)
                await self._accounts.insert_transaction(
                    db,
                    bet.user_id,
                    kind,
                    credit,
                    note=f"Bet {target.value}",
                    bet_id=bet_id,
                )

        previous = bet.status
        bet.status = target
        if credit is not None:
            bet.payout = credit
        logger.info(
            "Bet %s: %s -> %s by %s credit=%s",
            bet_id, previous.value, target.value, principal.user_id,
            credit.display() if credit is not None else "-",
        )
        return bet

    @staticmethod
    def _credit_for(
        bet: Bet, target: BetStatus, payout_override: Money | None
    ) -> tuple[Money | None, TransactionKind]:
        effect = LEDGER_EFFECTS[target]
        if effect is LedgerEffect.REFUND_STAKE:
            return bet.stake, TransactionKind.ADJUSTMENT
        if effect is LedgerEffect.CREDIT_PAYOUT:
            if payout_override is None:
                return bet.potential_payout, TransactionKind.BET_PAYOUT
            if payout_override.currency is not bet.currency:
                raise PayoutCurrencyMismatchError(bet.currency.value)
            return payout_override, TransactionKind.BET_PAYOUT
        return None, TransactionKind.ADJUSTMENT

    # ------------------------------------------------------------------
    # Direct balance adjustment
    # ------------------------------------------------------------------

    async def adjust_balance(
        self,
        db: AsyncSession,
        principal: Principal | None,
        target_user_id: str,
        amount: Money,
        kind: TransactionKind,
        note: str = "",
    ) -> Account:
        """Admin credit/debit with its audit row.

        deposit credits and withdrawal debits a positive amount; adjustment
        applies a signed amount as given. Never clamps: a result below zero
        raises NegativeResultingBalanceError.
        """
        principal = await require_capability(self._authorizer, db, principal, Capability.ADMIN)
        delta = _adjustment_delta(amount, kind)

        async with unit_of_work(db):
            account = await self._accounts.apply_delta(db, target_user_id, delta)
            if account is None:
                existing = await self._require_account(db, target_user_id)
                raise NegativeResultingBalanceError(
                    delta.currency.value, delta.amount, existing.balance(delta.currency).amount
                )
            await self._accounts.insert_transaction(
                db,
                target_user_id,
                kind,
                delta,
                note=note or f"{kind.value} by admin {principal.user_id}",
            )

        logger.info(
            "Balance %s for %s: %s by %s",
            kind.value, target_user_id, delta.display(), principal.user_id,
        )
        return account

    async def _require_account(self, db: AsyncSession, user_id: str) -> Account:
        account = await self._accounts.get_account(db, user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account


def _adjustment_delta(amount: Money, kind: TransactionKind) -> Money:
    if kind not in ADJUSTABLE_KINDS:
        raise InvalidAdjustmentError(f"kind {kind.value} is reserved for bets")
    if amount.amount == 0:
        raise InvalidAdjustmentError("amount must be non-zero")
    if kind is TransactionKind.ADJUSTMENT:
        return amount
    if amount.amount < 0:
        raise InvalidAdjustmentError(f"{kind.value} amount must be positive")
    return -amount if kind is TransactionKind.WITHDRAWAL else amount
