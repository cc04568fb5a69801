"""
Access diagnostic — explains what a user can do and see, and why.

Prints the legacy role floor, the custom-role grants (with any drift
between bindings and the legacy JSON mirror), the effective set, and
per-menu visibility.  Read-only: nothing is repaired.

Usage:
    uv run python -m hr_authz.scripts.diagnose_access <user_id>
"""

import asyncio
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hr_authz.core.config import settings
from hr_authz.core.exceptions import InvalidPrincipalState, ResourceNotFoundError
from hr_authz.rbac.legacy import WILDCARD_PERMISSION
from hr_authz.rbac.menu import explain_visibility
from hr_authz.rbac.principal import find_binding_drift
from hr_authz.rbac.resolver import custom_role_permissions, enum_fallback, resolve
from hr_authz.services import menu_service
from hr_authz.services.principal_service import load_principal_with_role


async def print_report(user_id: int, session: AsyncSession) -> int:
    """Print the diagnostic for `user_id`; returns a process exit code."""
    try:
        principal, role = await load_principal_with_role(user_id, session)
    except ResourceNotFoundError as exc:
        print(f"\n❌  {exc.message}")
        return 1

    print(f"\n🔍  Access diagnostic for user {principal.user_id}\n")
    print(f"  Legacy role:  {principal.role}")
    print(f"  Active:       {principal.active}")

    try:
        floor = enum_fallback(principal)
    except InvalidPrincipalState as exc:
        print(f"\n❌  {exc.message}")
        return 2
    print(f"  Floor:        {len(floor)} permission(s)")

    # ── Custom role ──────────────────────────────────────────
    if principal.custom_role_id is None:
        print("  Custom role:  none")
    elif role is None:
        print(f"  Custom role:  #{principal.custom_role_id} (missing, legacy role governs)")
    else:
        granted = custom_role_permissions(principal, role)
        print(f"  Custom role:  {role.name} (#{role.id}), {len(granted)} permission(s)")
        drift = find_binding_drift(role)
        if drift.legacy_malformed:
            print("    ⚠  legacy JSON mirror is malformed and ignored")
        if drift.only_in_bindings:
            print(f"    ⚠  only in bindings:    {', '.join(sorted(drift.only_in_bindings))}")
        if drift.only_in_legacy:
            print(f"    ⚠  only in legacy JSON: {', '.join(sorted(drift.only_in_legacy))}")

    # ── Effective set ────────────────────────────────────────
    effective = resolve(principal, role)
    print(f"\n  Effective permissions ({len(effective)}):")
    if WILDCARD_PERMISSION in effective:
        print("    👑  super-admin wildcard")
    for name in sorted(effective - {WILDCARD_PERMISSION}):
        marker = " " if name in floor else "+"
        print(f"    {marker} {name}")

    # ── Menus ────────────────────────────────────────────────
    tree = await menu_service.get_active_menu_tree(session)
    print("\n  Menus:")
    for row in explain_visibility(tree, effective):
        if row.visible:
            kids = f" → {', '.join(row.visible_children)}" if row.visible_children else ""
            print(f"    ✅  {row.name}{kids}")
        else:
            print(f"    ❌  {row.name} ({row.reason})")
    print()
    return 0


async def diagnose(user_id: int) -> int:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with session_factory() as session:
            return await print_report(user_id, session)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) != 2 or not sys.argv[1].isdigit():
        print("usage: python -m hr_authz.scripts.diagnose_access <user_id>")
        sys.exit(64)
    sys.exit(asyncio.run(diagnose(int(sys.argv[1]))))
