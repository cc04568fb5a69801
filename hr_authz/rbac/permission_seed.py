"""
Permission, system-role & menu seeding script.

Run this once against a live database to populate the catalog, one
system role per legacy enum value, and the default navigation.  It is
IDEMPOTENT — safe to re-run:

    • catalog entries are created, or their label/group refreshed;
    • system roles are created once; on later runs only *missing*
      bindings are added (never removed) and the legacy JSON mirror
      is only ever widened;
    • menus are seeded only while the menu table is empty.

Usage:
    python -m hr_authz.rbac.permission_seed
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hr_authz.core.config import settings
from hr_authz.models.base import Base
from hr_authz.models.menu_item import MenuItem
from hr_authz.models.permission import Permission
from hr_authz.models.role import Role, RolePermission
from hr_authz.rbac.catalog import CATALOG, SystemPermissions as P
from hr_authz.rbac.legacy import ENUM_FALLBACK_TABLE, SYSTEM_ROLE_DEFINITIONS

logger = logging.getLogger("rbac")

# ────────────────────────────────────────────────────────────────────
# DEFAULT NAVIGATION
#
#     (name, path, icon, section, permission, children)
# ────────────────────────────────────────────────────────────────────
DEFAULT_MENUS: list[dict] = [
    {"name": "Dashboard", "path": "/", "icon": "📊", "section": "main", "permission": P.REPORTS_VIEW},
    {"name": "Attendance", "path": "/attendance", "icon": "⏰", "section": "main", "permission": None},
    {"name": "Expense Claims", "path": "/expenses", "icon": "💰", "section": "main", "permission": P.EXPENSES_VIEW},
    {
        "name": "Team", "path": None, "icon": "👥", "section": "main", "permission": P.DEPARTMENTS_VIEW,
        "children": [
            {"name": "Employee Directory", "path": "/employees", "icon": "📋", "permission": P.USERS_VIEW},
            {"name": "Org Chart", "path": "/employees/org-chart", "icon": "🏢", "permission": P.DEPARTMENTS_VIEW},
            {"name": "Team Announcements", "path": "/employees/announcements", "icon": "📢", "permission": P.ANNOUNCEMENTS_VIEW},
        ],
    },
    {
        "name": "User Management", "path": None, "icon": "👤", "section": "main", "permission": P.USERS_VIEW,
        "children": [
            {"name": "Users", "path": "/users", "icon": "📋", "permission": P.USERS_VIEW},
            {"name": "Roles & Permissions", "path": "/users/roles", "icon": "🔐", "permission": P.ROLES_MANAGE},
            {"name": "Menu Configuration", "path": "/users/menus", "icon": "📑", "permission": P.ROLES_MANAGE},
        ],
    },
    {
        "name": "Leaves", "path": None, "icon": "🏖️", "section": "main", "permission": None,
        "children": [
            {"name": "My Leaves", "path": "/leaves/my-leaves", "icon": "📅", "permission": P.LEAVES_VIEW_OWN},
            {"name": "All Leaves", "path": "/leaves/all", "icon": "📋", "permission": P.LEAVES_VIEW_ALL},
            {"name": "Leave Review", "path": "/leaves/review", "icon": "✅", "permission": P.LEAVES_APPROVE},
        ],
    },
    {
        "name": "Reports & Analytics", "path": None, "icon": "📊", "section": "advanced", "permission": P.REPORTS_VIEW,
        "children": [
            {"name": "HR Dashboard", "path": "/reports/hr", "icon": "📈", "permission": P.REPORTS_VIEW},
            {"name": "Analytics", "path": "/reports/analytics", "icon": "📉", "permission": P.ANALYTICS_VIEW},
        ],
    },
    {
        "name": "Administration", "path": None, "icon": "⚙️", "section": "advanced", "permission": P.SYSTEM_ADMIN,
        "children": [
            {"name": "Settings", "path": "/settings", "icon": "🔧", "permission": P.SYSTEM_SETTINGS},
        ],
    },
    {
        "name": "Training", "path": None, "icon": "📚", "section": "hrms", "permission": None,
        "children": [
            {"name": "My Training", "path": "/training/mine", "icon": "🎓", "permission": P.TRAINING_VIEW_OWN},
            {"name": "Training Catalog", "path": "/training", "icon": "📚", "permission": P.TRAINING_VIEW},
        ],
    },
    {
        "name": "Payroll", "path": None, "icon": "💵", "section": "hrms", "permission": None,
        "children": [
            {"name": "My Payslips", "path": "/payroll/mine", "icon": "🧾", "permission": P.PAYROLL_VIEW_OWN},
            {"name": "Payroll", "path": "/payroll", "icon": "💵", "permission": P.PAYROLL_VIEW},
        ],
    },
]


async def seed_permissions(session: AsyncSession) -> dict[str, Permission]:
    existing = {p.name: p for p in (await session.execute(select(Permission))).scalars().all()}
    for entry in CATALOG:
        perm = existing.get(entry.name)
        if perm is None:
            perm = Permission(
                name=entry.name,
                label=entry.label,
                description=entry.label,
                group_name=entry.group_name,
                group_icon=entry.group_icon,
                sort_order=entry.sort_order,
            )
            session.add(perm)
            existing[entry.name] = perm
        else:
            perm.label = entry.label
            perm.group_name = entry.group_name
            perm.group_icon = entry.group_icon
            perm.sort_order = entry.sort_order
    await session.flush()  # ensure IDs are available
    return existing


async def seed_system_roles(session: AsyncSession, perms: dict[str, Permission]) -> None:
    existing = {r.enum_equivalent: r for r in (await session.execute(select(Role))).scalars().all()}

    for legacy_role, names in ENUM_FALLBACK_TABLE.items():
        role = existing.get(legacy_role.value)
        if role is None:
            meta = SYSTEM_ROLE_DEFINITIONS[legacy_role]
            role = Role(
                name=meta["name"],
                description=meta["description"],
                color=meta["color"],
                icon=meta["icon"],
                is_system=True,
                enum_equivalent=legacy_role.value,
                permissions=sorted(names),
            )
            session.add(role)
        else:
            mirror = role.permissions if isinstance(role.permissions, list) else []
            widened = sorted(set(mirror) | names)
            if widened != sorted(mirror):
                role.permissions = widened

        bound = {b.permission_id for b in role.bindings}
        for name in sorted(names):
            perm = perms.get(name)
            if perm is not None and perm.id not in bound:
                role.bindings.append(RolePermission(permission=perm))

    await session.flush()


async def seed_menus(session: AsyncSession, perms: dict[str, Permission]) -> None:
    count = (await session.execute(select(func.count(MenuItem.id)))).scalar_one()
    if count:
        return

    def _permission_id(name: str | None) -> int | None:
        return perms[name].id if name in perms else None

    for order, menu in enumerate(DEFAULT_MENUS, start=1):
        parent = MenuItem(
            name=menu["name"],
            path=menu["path"],
            icon=menu["icon"],
            section=menu["section"],
            sort_order=order,
            permission_id=_permission_id(menu["permission"]),
        )
        session.add(parent)
        await session.flush()
        for child_order, child in enumerate(menu.get("children", []), start=1):
            session.add(
                MenuItem(
                    name=child["name"],
                    path=child["path"],
                    icon=child["icon"],
                    section=menu["section"],
                    sort_order=child_order,
                    permission_id=_permission_id(child["permission"]),
                    parent_id=parent.id,
                )
            )
    await session.flush()


async def seed(session: AsyncSession) -> None:
    """Create catalog, system roles & menus if they don't already exist."""
    perms = await seed_permissions(session)
    await seed_system_roles(session, perms)
    await seed_menus(session, perms)
    await session.commit()
    logger.info("Permissions, system roles and menus seeded.")


# ────────────────────────────────────────────────────────────────────
# CLI entrypoint:  python -m hr_authz.rbac.permission_seed
# ────────────────────────────────────────────────────────────────────
async def main() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as session:
        await seed(session)
    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
