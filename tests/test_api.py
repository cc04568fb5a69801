"""
Tests — HTTP enforcement point
==============================
Bearer token → principal → effective set → guard, through the FastAPI app.
"""

from __future__ import annotations

from sqlalchemy import select

from hr_authz.core.security import create_access_token
from hr_authz.models import Role
from hr_authz.rbac.legacy import ENUM_FALLBACK_TABLE, UserRole


# ── Helpers ──────────────────────────────────────────────────


async def _system_role_id(db, legacy_role: UserRole) -> int:
    role = (
        await db.execute(select(Role).where(Role.enum_equivalent == legacy_role.value))
    ).scalar_one()
    return role.id


# ══════════════════════════════════════════════════════════════
# AUTHENTICATION
# ══════════════════════════════════════════════════════════════


class TestAuthentication:
    async def test_health_is_public(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200

    async def test_missing_token(self, client):
        resp = await client.get("/api/me/permissions")
        assert resp.status_code == 401

    async def test_garbage_token(self, client):
        resp = await client.get("/api/me/permissions", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    async def test_token_without_subject(self, client):
        token = create_access_token({"scope": "x"})
        resp = await client.get("/api/me/permissions", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_unknown_user(self, client):
        token = create_access_token({"sub": "4242"})
        resp = await client.get("/api/me/permissions", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


# ══════════════════════════════════════════════════════════════
# ENFORCEMENT
# ══════════════════════════════════════════════════════════════


class TestEnforcement:
    async def test_employee_is_denied_with_missing_permission(self, client, make_user, auth_headers):
        user = await make_user()
        resp = await client.get("/api/roles", headers=auth_headers(user))
        assert resp.status_code == 403
        assert resp.json()["permission"] == "roles.view"

    async def test_admin_lists_roles(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_ADMIN")
        resp = await client.get("/api/roles", headers=auth_headers(user))
        assert resp.status_code == 200
        assert {r["name"] for r in resp.json()} >= {"Employee", "Administrator"}

    async def test_custom_role_grants_access(self, client, make_user, make_role, auth_headers):
        role = await make_role("Role Viewers", bound=("roles.view",))
        user = await make_user(role_id=role.id)
        resp = await client.get("/api/roles", headers=auth_headers(user))
        assert resp.status_code == 200

    async def test_corrupted_role_is_a_server_error(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_UNKNOWN")
        resp = await client.get("/api/me/permissions", headers=auth_headers(user))
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Invalid principal state"

    async def test_disabled_account(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_SUPER_ADMIN", is_active=False)
        resp = await client.get("/api/roles", headers=auth_headers(user))
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Account disabled"

    async def test_super_admin_passes_any_check(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_SUPER_ADMIN")
        resp = await client.get("/api/permissions/grouped", headers=auth_headers(user))
        assert resp.status_code == 200
        assert resp.json()


# ══════════════════════════════════════════════════════════════
# SELF-SERVICE
# ══════════════════════════════════════════════════════════════


class TestMe:
    async def test_my_permissions(self, client, make_user, auth_headers):
        user = await make_user()
        resp = await client.get("/api/me/permissions", headers=auth_headers(user))
        body = resp.json()
        assert resp.status_code == 200
        assert body["user_id"] == user.id
        assert set(body["permissions"]) == ENUM_FALLBACK_TABLE[UserRole.EMPLOYEE]
        assert body["is_super_admin"] is False

    async def test_super_admin_flag(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_SUPER_ADMIN")
        resp = await client.get("/api/me/permissions", headers=auth_headers(user))
        assert resp.json()["is_super_admin"] is True

    async def test_my_menus_are_pruned(self, client, make_user, auth_headers):
        user = await make_user()
        resp = await client.get("/api/me/menus", headers=auth_headers(user))
        assert resp.status_code == 200
        sections = resp.json()
        assert [s["key"] for s in sections] == ["main"]
        names = [item["name"] for item in sections[0]["items"]]
        assert "Attendance" in names
        assert "Dashboard" not in names
        leaves = next(item for item in sections[0]["items"] if item["name"] == "Leaves")
        assert [c["name"] for c in leaves["children"]] == ["My Leaves"]


# ══════════════════════════════════════════════════════════════
# ADMINISTRATION
# ══════════════════════════════════════════════════════════════


class TestAdministration:
    async def test_system_role_delete_conflicts(self, client, seeded_db, make_user, auth_headers):
        user = await make_user(role="ROLE_ADMIN")
        role_id = await _system_role_id(seeded_db, UserRole.EMPLOYEE)
        resp = await client.delete(f"/api/roles/{role_id}", headers=auth_headers(user))
        assert resp.status_code == 409

    async def test_delete_custom_role(self, client, make_user, make_role, auth_headers):
        admin = await make_user(role="ROLE_ADMIN")
        role = await make_role("Short-lived")
        member = await make_user(role_id=role.id)

        resp = await client.delete(f"/api/roles/{role.id}", headers=auth_headers(admin))
        assert resp.status_code == 200

        resp = await client.get("/api/me/permissions", headers=auth_headers(member))
        assert resp.status_code == 200
        assert set(resp.json()["permissions"]) == ENUM_FALLBACK_TABLE[UserRole.EMPLOYEE]

    async def test_missing_role_is_404(self, client, make_user, auth_headers):
        user = await make_user(role="ROLE_ADMIN")
        resp = await client.get("/api/roles/999", headers=auth_headers(user))
        assert resp.status_code == 404

    async def test_role_drift(self, client, make_user, make_role, auth_headers):
        admin = await make_user(role="ROLE_ADMIN")
        role = await make_role("Drifty", bound=("users.view",), legacy="not-an-array")
        resp = await client.get(f"/api/roles/{role.id}/drift", headers=auth_headers(admin))
        assert resp.status_code == 200
        assert resp.json()["legacy_malformed"] is True

    async def test_assign_role(self, client, make_user, make_role, auth_headers):
        admin = await make_user(role="ROLE_ADMIN")
        role = await make_role("Payroll Clerks", bound=("payroll.view",))
        user = await make_user()
        resp = await client.put(f"/api/users/{user.id}/role/{role.id}", headers=auth_headers(admin))
        assert resp.status_code == 200

        resp = await client.get("/api/me/permissions", headers=auth_headers(user))
        assert "payroll.view" in resp.json()["permissions"]

    async def test_flat_permission_listing(self, client, make_user, auth_headers):
        admin = await make_user(role="ROLE_ADMIN")
        resp = await client.get("/api/permissions", headers=auth_headers(admin))
        assert resp.status_code == 200
        assert all("group_name" in p for p in resp.json())

    async def test_permission_delete_requires_permissions_manage(self, client, make_user, auth_headers):
        admin = await make_user(role="ROLE_ADMIN")
        resp = await client.delete("/api/permissions/1", headers=auth_headers(admin))
        assert resp.status_code == 403
        assert resp.json()["permission"] == "permissions.manage"
