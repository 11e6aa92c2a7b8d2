"""Capability checks: authorize(principal, capability) -> bool.

The core calls this once per privileged operation. Role storage is the
`user_roles` table; an `admin` row grants Capability.ADMIN.
"""

import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_common.enums import Capability
from src.sb_common.errors import UnauthorizedError
from src.sb_gateway.auth.principal import Principal, require_authenticated
from src.sb_gateway.user.db_models import UserRoleModel

_ROLE_FOR_CAPABILITY: dict[Capability, str] = {Capability.ADMIN: "admin"}


class Authorizer(Protocol):
    async def authorize(
        self, db: AsyncSession, principal: Principal, capability: Capability
    ) -> bool: ...


class RoleAuthorizer:
    async def authorize(
        self, db: AsyncSession, principal: Principal, capability: Capability
    ) -> bool:
        try:
            user_uuid = uuid.UUID(principal.user_id)
        except ValueError:
            return False
        result = await db.execute(
            select(UserRoleModel.role).where(
                UserRoleModel.user_id == user_uuid,
                UserRoleModel.role == _ROLE_FOR_CAPABILITY[capability],
            )
        )
        return result.scalar_one_or_none() is not None


async def require_capability(
    authorizer: Authorizer,
    db: AsyncSession,
    principal: Principal | None,
    capability: Capability,
) -> Principal:
    """Raise Unauthenticated / Unauthorized unless the principal holds capability."""
    principal = require_authenticated(principal)
    if not await authorizer.authorize(db, principal, capability):
        raise UnauthorizedError(capability.value)
    return principal
