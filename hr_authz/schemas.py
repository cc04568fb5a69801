"""
Pydantic schemas for request / response serialization.

Kept in a single file for now — split per-domain when it grows.
Schemas are deliberately decoupled from SQLAlchemy models and from the
rbac dataclasses so the API surface can evolve independently.
"""

from datetime import datetime

from pydantic import BaseModel


# ── Permissions ──────────────────────────────────────────────────────
class PermissionOut(BaseModel):
    id: int | None = None
    name: str
    label: str | None = None
    group_name: str | None = None
    group_icon: str | None = None
    sort_order: int = 0

    model_config = {"from_attributes": True}


class PermissionGroupOut(BaseModel):
    name: str
    icon: str
    permissions: list[PermissionOut] = []

    model_config = {"from_attributes": True}


class PermissionGroupSummary(BaseModel):
    name: str
    icon: str


class EffectivePermissionsOut(BaseModel):
    user_id: int
    permissions: list[str]
    is_super_admin: bool


# ── Roles ────────────────────────────────────────────────────────────
class RoleOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None
    is_system: bool
    enum_equivalent: str | None = None
    permissions: list[str] = []
    user_count: int | None = None
    created_at: datetime


class RoleDriftOut(BaseModel):
    role_id: int
    only_in_bindings: list[str]
    only_in_legacy: list[str]
    legacy_malformed: bool
    has_drift: bool


# ── Menus ────────────────────────────────────────────────────────────
class MenuEntryOut(BaseModel):
    id: int
    name: str
    path: str | None = None
    icon: str | None = None
    section: str
    sort_order: int
    permission: str | None = None
    children: list["MenuEntryOut"] = []


class MenuSectionOut(BaseModel):
    key: str
    label: str
    items: list[MenuEntryOut]


# ── Generic ──────────────────────────────────────────────────────────
class MessageResponse(BaseModel):
    detail: str
