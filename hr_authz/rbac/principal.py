"""
Plain snapshots of the data the resolver works on.

The resolver never touches ORM objects directly: services load a
`Principal` and (optionally) a `RoleSnapshot` immediately before a
check, so every decision function below stays pure.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from hr_authz.core.exceptions import MalformedLegacyPermissionData
from hr_authz.rbac.legacy import WILDCARD_PERMISSION, UserRole

logger = logging.getLogger("rbac")


@dataclass(frozen=True)
class Principal:
    """The authenticated user, reduced to what authorization needs."""

    user_id: int
    role: str
    custom_role_id: int | None = None
    active: bool = True


@dataclass(frozen=True)
class RoleSnapshot:
    """
    A role as read from the store.

    - bindings: names reached through `role_permissions`.
    - legacy_permissions: the raw legacy JSON value, unvalidated.
    """

    id: int
    name: str
    bindings: frozenset[str] = field(default_factory=frozenset)
    legacy_permissions: Any = None
    is_system: bool = False
    enum_equivalent: str | None = None

    @classmethod
    def from_model(cls, role: Any) -> "RoleSnapshot":
        return cls(
            id=role.id,
            name=role.name,
            bindings=frozenset(role.bound_permission_names),
            legacy_permissions=role.permissions,
            is_system=bool(role.is_system),
            enum_equivalent=role.enum_equivalent,
        )

    @property
    def signals_super_admin(self) -> bool:
        if self.enum_equivalent == UserRole.SUPER_ADMIN.value:
            return True
        return WILDCARD_PERMISSION in list_permission_names(self)


def parse_legacy_permissions(role_id: Any, raw: Any) -> frozenset[str]:
    """
    Strictly parse a legacy JSON permission mirror.

    `None` means "no mirror" and yields an empty set.  A JSON-encoded
    string is decoded first.  Anything that is not a sequence of strings
    raises `MalformedLegacyPermissionData`.
    """
    if raw is None:
        return frozenset()
    value = raw
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise MalformedLegacyPermissionData(role_id, raw)
    if not isinstance(value, (list, tuple)):
        raise MalformedLegacyPermissionData(role_id, raw)
    if not all(isinstance(item, str) for item in value):
        raise MalformedLegacyPermissionData(role_id, raw)
    return frozenset(value)


def list_permission_names(role: RoleSnapshot) -> frozenset[str]:
    """Union of the role's relational bindings and its legacy JSON mirror."""
    try:
        legacy = parse_legacy_permissions(role.id, role.legacy_permissions)
    except MalformedLegacyPermissionData as exc:
        logger.warning("Ignoring legacy permissions for role %s: %s", role.id, exc.message)
        legacy = frozenset()
    return frozenset(role.bindings) | legacy


@dataclass(frozen=True)
class BindingDrift:
    role_id: int
    only_in_bindings: frozenset[str]
    only_in_legacy: frozenset[str]
    legacy_malformed: bool = False

    @property
    def has_drift(self) -> bool:
        return bool(self.only_in_bindings or self.only_in_legacy or self.legacy_malformed)


def find_binding_drift(role: RoleSnapshot) -> BindingDrift:
    """
    Compare relational bindings with the legacy JSON mirror.

    Diagnostic only. Resolution always takes the union; nothing here
    writes back to the store.
    """
    try:
        legacy = parse_legacy_permissions(role.id, role.legacy_permissions)
        malformed = False
    except MalformedLegacyPermissionData:
        legacy = frozenset()
        malformed = True
    if role.legacy_permissions is None:
        # No mirror at all is not drift.
        return BindingDrift(role.id, frozenset(), frozenset())
    return BindingDrift(
        role_id=role.id,
        only_in_bindings=role.bindings - legacy,
        only_in_legacy=legacy - role.bindings,
        legacy_malformed=malformed,
    )
