"""Authenticated principal threaded explicitly into every core operation."""

from dataclasses import dataclass

from src.sb_common.errors import UnauthenticatedError


@dataclass(frozen=True)
class Principal:
    user_id: str
    username: str = ""
    email: str = ""


def require_authenticated(principal: Principal | None) -> Principal:
    """Return the principal, or raise UnauthenticatedError when there is none."""
    if principal is None or not principal.user_id:
        raise UnauthenticatedError()
    return principal
