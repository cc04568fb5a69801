"""
Principal service — loads the snapshot the resolver needs, then resolves.

This is the only place that turns ORM rows into `Principal` /
`RoleSnapshot`.  A user whose `role_id` points at a deleted role is not
an error: the legacy role governs alone.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_authz.core.exceptions import ResourceNotFoundError
from hr_authz.models.role import Role, RolePermission
from hr_authz.models.user import User
from hr_authz.rbac.principal import Principal, RoleSnapshot
from hr_authz.rbac.resolver import resolve

logger = logging.getLogger("rbac")


async def get_principal_by_id(user_id: int, db: AsyncSession) -> Principal:
    user = await db.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError(f"User {user_id} not found")
    return Principal(
        user_id=user.id,
        role=user.role,
        custom_role_id=user.role_id,
        active=bool(user.is_active),
    )


async def get_role_snapshot(role_id: int, db: AsyncSession) -> RoleSnapshot | None:
    """The role with its bindings, or None if it doesn't exist."""
    stmt = (
        select(Role)
        .options(selectinload(Role.bindings).selectinload(RolePermission.permission))
        .where(Role.id == role_id)
    )
    role = (await db.execute(stmt)).scalar_one_or_none()
    if role is None:
        return None
    return RoleSnapshot.from_model(role)


async def load_principal_with_role(
    user_id: int,
    db: AsyncSession,
) -> tuple[Principal, RoleSnapshot | None]:
    principal = await get_principal_by_id(user_id, db)
    role = None
    if principal.custom_role_id is not None:
        role = await get_role_snapshot(principal.custom_role_id, db)
        if role is None:
            logger.warning(
                "User %s references missing role %s; using legacy role only",
                principal.user_id,
                principal.custom_role_id,
            )
    return principal, role


async def resolve_for_user(user_id: int, db: AsyncSession) -> frozenset[str]:
    principal, role = await load_principal_with_role(user_id, db)
    return resolve(principal, role)

