"""
Role service — read paths plus the handful of admin operations the
authorization core needs (delete, assign, bind / unbind).
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_authz.core.exceptions import ResourceConflictError, ResourceNotFoundError
from hr_authz.models.permission import Permission
from hr_authz.models.role import Role, RolePermission
from hr_authz.models.user import User
from hr_authz.rbac.principal import BindingDrift, RoleSnapshot, find_binding_drift

logger = logging.getLogger("rbac")


async def get_role(role_id: int, db: AsyncSession) -> Role:
    stmt = (
        select(Role)
        .options(selectinload(Role.bindings).selectinload(RolePermission.permission))
        .where(Role.id == role_id)
    )
    role = (await db.execute(stmt)).scalar_one_or_none()
    if role is None:
        raise ResourceNotFoundError(f"Role {role_id} not found")
    return role


async def list_roles(db: AsyncSession) -> list[tuple[Role, int]]:
    """All roles ordered by name, each with its assigned user count."""
    counts = (
        select(User.role_id, func.count(User.id).label("user_count"))
        .where(User.role_id.is_not(None))
        .group_by(User.role_id)
        .subquery()
    )
    stmt = (
        select(Role, func.coalesce(counts.c.user_count, 0))
        .outerjoin(counts, counts.c.role_id == Role.id)
        .order_by(Role.name)
    )
    result = await db.execute(stmt)
    return [(role, int(count)) for role, count in result.all()]


async def get_binding_drift(role_id: int, db: AsyncSession) -> BindingDrift:
    role = await get_role(role_id, db)
    return find_binding_drift(RoleSnapshot.from_model(role))


async def delete_role(role_id: int, db: AsyncSession) -> None:
    """
    Delete a custom role.

    System roles are refused.  Users pointing at the role are orphaned
    (`role_id` → NULL) and fall back to their legacy role.
    """
    role = await get_role(role_id, db)
    if role.is_system:
        raise ResourceConflictError("System roles cannot be deleted")

    orphaned = await db.execute(
        update(User).where(User.role_id == role_id).values(role_id=None)
    )
    await db.delete(role)
    await db.flush()
    logger.info("Role %s deleted; %s user(s) orphaned", role_id, orphaned.rowcount)


async def assign_role_to_user(user_id: int, role_id: int, db: AsyncSession) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError(f"User {user_id} not found")
    await get_role(role_id, db)
    user.role_id = role_id
    await db.flush()
    return user


async def _get_permission_by_name(name: str, db: AsyncSession) -> Permission:
    perm = (
        await db.execute(select(Permission).where(Permission.name == name))
    ).scalar_one_or_none()
    if perm is None:
        raise ResourceNotFoundError(f"Permission {name} not found")
    return perm


async def add_binding(role_id: int, permission_name: str, db: AsyncSession) -> RolePermission:
    role = await get_role(role_id, db)
    perm = await _get_permission_by_name(permission_name, db)
    for binding in role.bindings:
        if binding.permission_id == perm.id:
            return binding
    binding = RolePermission(permission=perm)
    role.bindings.append(binding)
    await db.flush()
    return binding


async def remove_binding(role_id: int, permission_name: str, db: AsyncSession) -> None:
    role = await get_role(role_id, db)
    perm = await _get_permission_by_name(permission_name, db)
    role.bindings = [b for b in role.bindings if b.permission_id != perm.id]
    await db.flush()
