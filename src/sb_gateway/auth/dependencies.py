"""FastAPI dependencies resolving the bearer token to a Principal.

Usage in any protected router:
    @router.get("/protected")
    async def protected(principal: Principal = Depends(get_current_principal)):
        ...
"""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_common.database import get_db_session
from src.sb_common.errors import AccountDisabledError, InvalidCredentialsError
from src.sb_gateway.auth.jwt_handler import decode_token
from src.sb_gateway.auth.principal import Principal
from src.sb_gateway.user.db_models import UserModel

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
_optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def _resolve_principal(token: str, db: AsyncSession) -> Principal:
    try:
        payload = decode_token(token, expected_type="access")
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    try:
        user_id = uuid.UUID(payload.get("sub") or "")
    except ValueError:
        raise _CREDENTIALS_EXCEPTION from None

    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    if not user.is_active:
        raise AccountDisabledError()

    return Principal(user_id=str(user.id), username=user.username, email=user.email)


async def get_current_principal(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Principal:
    """Validate the bearer token; HTTP 401 if missing, invalid or expired."""
    return await _resolve_principal(token, db)


async def get_optional_principal(
    token: str | None = Depends(_optional_oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Principal | None:
    """Like get_current_principal, but yields None when no token is sent.

    Core services then raise UnauthenticatedError themselves.
    """
    if token is None:
        return None
    return await _resolve_principal(token, db)
