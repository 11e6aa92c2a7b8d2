"""User identity service: register, login, refresh, profile.

Registration inserts the users row and its zero-balance accounts row in the
caller's transaction (router wraps it in `async with db.begin()`). Emails are
stored lower-cased; the admin console looks players up by email.
"""

import uuid

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.sb_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.sb_gateway.auth.password import hash_password, verify_password
from src.sb_gateway.auth.principal import Principal
from src.sb_gateway.user.db_models import UserModel, UserRoleModel

_CREATE_ACCOUNT_SQL = text(
    "INSERT INTO accounts (user_id, balance_usd, balance_btc) VALUES (:user_id, 0, 0)"
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        db: AsyncSession,
        display_name: str | None = None,
    ) -> UserModel:
        email = normalize_email(email)
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        if result.scalar_one_or_none() is not None:
            raise UsernameExistsError()

        result = await db.execute(
            select(UserModel).where(UserModel.email == email)
        )
        if result.scalar_one_or_none() is not None:
            raise EmailExistsError()

        user = UserModel(
            username=username,
            email=email,
            display_name=(display_name or "").strip() or username,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        await db.flush()  # assigns user.id

        await db.execute(_CREATE_ACCOUNT_SQL, {"user_id": str(user.id)})
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Authenticate and return (user, access_token, refresh_token).

        Unknown user and wrong password raise the same error.
        """
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return (
            user,
            create_access_token(str(user.id)),
            create_refresh_token(str(user.id)),
        )

    async def refresh(self, refresh_token: str) -> str:
        payload = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(payload["sub"]))

    async def roles(self, user_id: uuid.UUID, db: AsyncSession) -> list[str]:
        """Role names held by the user, sorted. Drives the admin console entry point."""
        result = await db.execute(
            select(UserRoleModel.role).where(UserRoleModel.user_id == user_id)
        )
        return sorted(result.scalars().all())

    async def profile(
        self, principal: Principal, db: AsyncSession
    ) -> tuple[UserModel, list[str]]:
        user_id = uuid.UUID(principal.user_id)
        result = await db.execute(select(UserModel).where(UserModel.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise InvalidCredentialsError()
        return user, await self.roles(user_id, db)
