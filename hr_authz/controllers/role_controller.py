"""
Role controller — listing, drift diagnostics, deletion, assignment.

Deleting a role orphans its users; they keep their legacy role floor.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.controllers.serializers import drift_out, role_out
from hr_authz.core.database import get_db
from hr_authz.rbac.catalog import SystemPermissions
from hr_authz.rbac.dependencies import require_permission
from hr_authz.schemas import MessageResponse, RoleDriftOut, RoleOut
from hr_authz.services import role_service

router = APIRouter(prefix="/api", tags=["Roles"])


@router.get(
    "/roles",
    response_model=list[RoleOut],
    dependencies=[Depends(require_permission(SystemPermissions.ROLES_VIEW))],
)
async def list_roles(db: AsyncSession = Depends(get_db)):
    rows = await role_service.list_roles(db)
    return [role_out(role, count) for role, count in rows]


@router.get(
    "/roles/{role_id}",
    response_model=RoleOut,
    dependencies=[Depends(require_permission(SystemPermissions.ROLES_VIEW))],
)
async def get_role(role_id: int, db: AsyncSession = Depends(get_db)):
    return role_out(await role_service.get_role(role_id, db))


@router.get(
    "/roles/{role_id}/drift",
    response_model=RoleDriftOut,
    dependencies=[Depends(require_permission(SystemPermissions.ROLES_MANAGE))],
)
async def get_role_drift(role_id: int, db: AsyncSession = Depends(get_db)):
    """Bindings vs legacy JSON mirror. Read-only; nothing is repaired."""
    return drift_out(await role_service.get_binding_drift(role_id, db))


@router.delete(
    "/roles/{role_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission(SystemPermissions.ROLES_MANAGE))],
)
async def delete_role(role_id: int, db: AsyncSession = Depends(get_db)):
    await role_service.delete_role(role_id, db)
    return MessageResponse(detail="Role deleted")


@router.put(
    "/users/{user_id}/role/{role_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission(SystemPermissions.USERS_MANAGE_ROLES))],
)
async def assign_role(user_id: int, role_id: int, db: AsyncSession = Depends(get_db)):
    await role_service.assign_role_to_user(user_id, role_id, db)
    return MessageResponse(detail="Role assigned")
