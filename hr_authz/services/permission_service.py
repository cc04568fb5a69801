"""
Permission service — reads the catalog from the store and hands it to
the pure ordering / grouping helpers in `hr_authz.rbac.catalog`.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.core.exceptions import ResourceConflictError, ResourceNotFoundError
from hr_authz.models.menu_item import MenuItem
from hr_authz.models.permission import Permission
from hr_authz.models.role import RolePermission
from hr_authz.rbac.catalog import list_groups, list_permissions as order_permissions


async def list_permissions(db: AsyncSession, group_by: bool = False) -> list[Any]:
    rows = (await db.execute(select(Permission))).scalars().all()
    return order_permissions(rows, group_by=group_by)


async def list_permission_groups(db: AsyncSession) -> list[dict[str, str]]:
    rows = (await db.execute(select(Permission))).scalars().all()
    return list_groups(rows)


async def get_permission(permission_id: int, db: AsyncSession) -> Permission:
    perm = await db.get(Permission, permission_id)
    if perm is None:
        raise ResourceNotFoundError(f"Permission {permission_id} not found")
    return perm


async def delete_permission(permission_id: int, db: AsyncSession) -> None:
    """Hard-delete a permission that no role binding or menu gate references."""
    perm = await get_permission(permission_id, db)
    bound = (
        await db.execute(
            select(RolePermission.role_id).where(RolePermission.permission_id == perm.id).limit(1)
        )
    ).first()
    if bound is not None:
        raise ResourceConflictError(f"Permission {perm.name} is still bound to a role")
    gated = (
        await db.execute(select(MenuItem.id).where(MenuItem.permission_id == perm.id).limit(1))
    ).first()
    if gated is not None:
        raise ResourceConflictError(f"Permission {perm.name} still gates a menu entry")
    await db.delete(perm)
    await db.flush()
