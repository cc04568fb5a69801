"""
Permission resolver — turns a principal into its effective permission set.

Precedence (all sources are unioned, none replaces another):

1. Enum floor: `ENUM_FALLBACK_TABLE[principal.role]`, always applied.
2. Custom role: bindings ∪ legacy JSON mirror of the linked role, if
   the role still exists.
3. Super-admin tier: if the enum value or the custom role signals it,
   `WILDCARD_PERMISSION` is added.

Everything here is pure.  Callers may cache a result for the lifetime
of one request, never across requests: bindings can change between
calls.
"""

from hr_authz.core.exceptions import InvalidPrincipalState
from hr_authz.rbac.legacy import ENUM_FALLBACK_TABLE, WILDCARD_PERMISSION, UserRole
from hr_authz.rbac.principal import Principal, RoleSnapshot, list_permission_names


def parse_principal_role(principal: Principal) -> UserRole:
    """The principal's legacy role, or `InvalidPrincipalState` if unrecognized."""
    role = UserRole.parse(principal.role)
    if role is None:
        raise InvalidPrincipalState(principal.user_id, principal.role)
    return role


def enum_fallback(principal: Principal) -> frozenset[str]:
    return ENUM_FALLBACK_TABLE[parse_principal_role(principal)]


def linked_role(principal: Principal, role: RoleSnapshot | None) -> RoleSnapshot | None:
    """
    `role` if it is the principal's custom role, else None.

    A missing snapshot, or one for another role id, is a dangling
    reference and is treated as "no custom role".
    """
    if principal.custom_role_id is None or role is None:
        return None
    if role.id != principal.custom_role_id:
        return None
    return role


def custom_role_permissions(principal: Principal, role: RoleSnapshot | None) -> frozenset[str]:
    linked = linked_role(principal, role)
    if linked is None:
        return frozenset()
    return list_permission_names(linked)


def resolve(principal: Principal, role: RoleSnapshot | None = None) -> frozenset[str]:
    """Effective permission set for `principal`.

    `role` is the snapshot fetched for `principal.custom_role_id`
    (None when the principal has no custom role or it no longer exists).
    Inactive principals resolve normally; activity is gated elsewhere.
    """
    legacy_role = parse_principal_role(principal)
    effective = set(ENUM_FALLBACK_TABLE[legacy_role])

    linked = linked_role(principal, role)
    if linked is not None:
        effective |= list_permission_names(linked)

    super_admin = legacy_role is UserRole.SUPER_ADMIN or (
        linked is not None and linked.signals_super_admin
    )
    if super_admin:
        effective.add(WILDCARD_PERMISSION)

    return frozenset(effective)
