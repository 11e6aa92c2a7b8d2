"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Identity
  2xxx: Balance/Ledger
  3xxx: Odds/Selections
  4xxx: Wager/Lifecycle
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Identity ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class UnauthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1006, "Authentication required", 401)


class UnauthorizedError(AppError):
    def __init__(self, capability: str) -> None:
        super().__init__(1007, f"Missing capability: {capability}", 403)


# --- 2xxx: Balance/Ledger ---

class InsufficientFundsError(AppError):
    def __init__(self, currency: str, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient {currency} balance: required {required}, available {available}",
            422,
        )


class AccountNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Account not found for user {user_id}", 404)


class NegativeResultingBalanceError(AppError):
    def __init__(self, currency: str, delta: int, available: int) -> None:
        super().__init__(
            2003,
            f"Adjustment of {delta} would make {currency} balance negative (available {available})",
            422,
        )


class InvalidAdjustmentError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2004, f"Invalid balance adjustment: {detail}", 422)


# --- 3xxx: Odds/Selections ---

class InvalidOddsError(AppError):
    def __init__(self, odds: int) -> None:
        super().__init__(3001, f"Invalid quoted odds: {odds}", 422)


class InsufficientLegsError(AppError):
    def __init__(self, legs: int) -> None:
        super().__init__(3002, f"A parlay needs at least 2 legs, got {legs}", 422)


class OddsFeedUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3003, f"Odds feed unavailable: {detail}", 502)


class EventNotOnBoardError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3004, f"Event not on the odds board: {event_id}", 404)


# --- 4xxx: Wager/Lifecycle ---

class NoStakeEnteredError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "No stake entered for any selection", 422)


class InvalidParlayError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4002, f"Invalid parlay: {detail}", 422)


class BetNotFoundError(AppError):
    def __init__(self, bet_id: str) -> None:
        super().__init__(4003, f"Bet not found: {bet_id}", 404)


class InvalidTransitionError(AppError):
    def __init__(self, bet_id: str, current: str, target: str, code: int = 4004) -> None:
        self.current = current
        self.target = target
        super().__init__(code, f"Bet {bet_id} cannot move from {current} to {target}", 409)


class AlreadySettledError(InvalidTransitionError):
    """Transition attempted on a bet that already reached a terminal status."""

    def __init__(self, bet_id: str, current: str, target: str) -> None:
        super().__init__(bet_id, current, target, code=4005)
        self.message = f"Bet {bet_id} is already {current}"
        self.args = (self.message,)


class PayoutCurrencyMismatchError(AppError):
    def __init__(self, bet_currency: str) -> None:
        super().__init__(
            4006, f"Payout override must be in the bet currency ({bet_currency})", 422
        )


class PartialSubmissionError(AppError):
    """Single-mode submission stopped at a failing leg after earlier legs committed."""

    def __init__(self, placed_bet_ids: list[str], failed_leg: str, cause: AppError) -> None:
        self.placed_bet_ids = placed_bet_ids
        self.failed_leg = failed_leg
        self.cause = cause
        super().__init__(
            4007,
            f"Placed {len(placed_bet_ids)} bet(s); leg {failed_leg} failed: {cause.message}",
            cause.http_status,
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
