"""
Self-service controller — what the caller may do and see.

Both routes only need an authenticated, active principal; they expose
the caller's own effective set and filtered navigation.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.controllers.serializers import menu_entry_out
from hr_authz.core.database import get_db
from hr_authz.rbac.dependencies import get_active_principal, get_effective_permissions
from hr_authz.rbac.legacy import WILDCARD_PERMISSION
from hr_authz.rbac.principal import Principal
from hr_authz.schemas import EffectivePermissionsOut, MenuSectionOut
from hr_authz.services import menu_service

router = APIRouter(prefix="/api/me", tags=["Me"])


@router.get("/permissions", response_model=EffectivePermissionsOut)
async def my_permissions(
    principal: Principal = Depends(get_active_principal),
    effective: frozenset[str] = Depends(get_effective_permissions),
):
    return EffectivePermissionsOut(
        user_id=principal.user_id,
        permissions=sorted(effective),
        is_super_admin=WILDCARD_PERMISSION in effective,
    )


@router.get("/menus", response_model=list[MenuSectionOut])
async def my_menus(
    principal: Principal = Depends(get_active_principal),
    effective: frozenset[str] = Depends(get_effective_permissions),
    db: AsyncSession = Depends(get_db),
):
    """Navigation for the caller, pruned and grouped by section."""
    sections = await menu_service.get_menu_sections_for_user(principal.user_id, db, effective)
    return [
        MenuSectionOut(
            key=section.key,
            label=section.label,
            items=[menu_entry_out(entry) for entry in section.items],
        )
        for section in sections
    ]
