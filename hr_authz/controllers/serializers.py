"""Converters from rbac dataclasses / ORM rows to response schemas."""

from hr_authz.models.role import Role
from hr_authz.rbac.menu import MenuEntry, MenuGroup
from hr_authz.rbac.principal import BindingDrift, RoleSnapshot, list_permission_names
from hr_authz.schemas import MenuEntryOut, RoleDriftOut, RoleOut


def menu_entry_out(entry: MenuEntry) -> MenuEntryOut:
    children = entry.children if isinstance(entry, MenuGroup) else ()
    return MenuEntryOut(
        id=entry.id,
        name=entry.name,
        path=entry.path,
        icon=entry.icon,
        section=entry.section,
        sort_order=entry.sort_order,
        permission=entry.permission,
        children=[menu_entry_out(child) for child in children],
    )


def role_out(role: Role, user_count: int | None = None) -> RoleOut:
    return RoleOut(
        id=role.id,
        name=role.name,
        description=role.description,
        color=role.color,
        icon=role.icon,
        is_system=role.is_system,
        enum_equivalent=role.enum_equivalent,
        permissions=sorted(list_permission_names(RoleSnapshot.from_model(role))),
        user_count=user_count,
        created_at=role.created_at,
    )


def drift_out(drift: BindingDrift) -> RoleDriftOut:
    return RoleDriftOut(
        role_id=drift.role_id,
        only_in_bindings=sorted(drift.only_in_bindings),
        only_in_legacy=sorted(drift.only_in_legacy),
        legacy_malformed=drift.legacy_malformed,
        has_drift=drift.has_drift,
    )
