"""
Menu service — fetches the menu snapshot and filters it per user.
"""

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.models.menu_item import MenuItem
from hr_authz.rbac.menu import MenuEntry, MenuSection, build_menu_tree, filter_for_principal, group_by_section
from hr_authz.services.principal_service import resolve_for_user


async def get_active_menu_tree(db: AsyncSession) -> tuple[MenuEntry, ...]:
    """Every active entry, built into a two-level tree (unfiltered)."""
    rows = (
        await db.execute(select(MenuItem).where(MenuItem.is_active == True))  # noqa: E712
    ).scalars().all()
    return build_menu_tree(rows)


async def get_menu_for_user(
    user_id: int,
    db: AsyncSession,
    effective: Collection[str] | None = None,
) -> tuple[MenuEntry, ...]:
    """
    The active tree pruned for `user_id`.

    Pass `effective` when the caller already resolved it for this
    request; otherwise it is resolved from the store.
    """
    if effective is None:
        effective = await resolve_for_user(user_id, db)
    tree = await get_active_menu_tree(db)
    return filter_for_principal(tree, effective)


async def get_menu_sections_for_user(
    user_id: int,
    db: AsyncSession,
    effective: Collection[str] | None = None,
) -> list[MenuSection]:
    return group_by_section(await get_menu_for_user(user_id, db, effective))
