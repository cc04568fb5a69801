"""
Permission catalog & menu administration controller.

Every route uses `Depends(require_permission(...))` for enforcement.
Controllers are THIN — they delegate to services and return schemas.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.controllers.serializers import menu_entry_out
from hr_authz.core.database import get_db
from hr_authz.rbac.catalog import SystemPermissions
from hr_authz.rbac.dependencies import require_permission
from hr_authz.schemas import (
    MenuEntryOut,
    MessageResponse,
    PermissionGroupOut,
    PermissionGroupSummary,
    PermissionOut,
)
from hr_authz.services import menu_service, permission_service

router = APIRouter(prefix="/api", tags=["Permissions"])

_manage_roles = require_permission(SystemPermissions.ROLES_MANAGE)


# ── Catalog ──────────────────────────────────────────────────────────
@router.get(
    "/permissions",
    response_model=list[PermissionOut],
    dependencies=[Depends(_manage_roles)],
)
async def list_permissions(db: AsyncSession = Depends(get_db)):
    result = await permission_service.list_permissions(db)
    return [PermissionOut.model_validate(p) for p in result]


@router.get(
    "/permissions/grouped",
    response_model=list[PermissionGroupOut],
    dependencies=[Depends(_manage_roles)],
)
async def list_permissions_grouped(db: AsyncSession = Depends(get_db)):
    result = await permission_service.list_permissions(db, group_by=True)
    return [PermissionGroupOut.model_validate(g) for g in result]


@router.get(
    "/permissions/groups",
    response_model=list[PermissionGroupSummary],
    dependencies=[Depends(_manage_roles)],
)
async def list_permission_groups(db: AsyncSession = Depends(get_db)):
    return await permission_service.list_permission_groups(db)


@router.delete(
    "/permissions/{permission_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission(SystemPermissions.PERMISSIONS_MANAGE))],
)
async def delete_permission(permission_id: int, db: AsyncSession = Depends(get_db)):
    await permission_service.delete_permission(permission_id, db)
    return MessageResponse(detail="Permission deleted")


# ── Menus ────────────────────────────────────────────────────────────
@router.get(
    "/menus",
    response_model=list[MenuEntryOut],
    dependencies=[Depends(_manage_roles)],
)
async def list_menus(db: AsyncSession = Depends(get_db)):
    """The full active tree, unfiltered, for the menu editor."""
    tree = await menu_service.get_active_menu_tree(db)
    return [menu_entry_out(entry) for entry in tree]
