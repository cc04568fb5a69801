"""
Permission catalog.

Two things live here:

1. The canonical list of permission names (`SystemPermissions`) and the
   seed entries (`CATALOG`) carrying their label and display group.
2. `list_permissions` / `list_groups` — pure presentation helpers that
   order or group any sequence of permission-like objects (ORM rows or
   `CatalogEntry`).  They never raise on an empty or missing catalog.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

DEFAULT_GROUP_NAME = "Other"
DEFAULT_GROUP_ICON = "📋"


class SystemPermissions:
    # Users
    USERS_VIEW = "users.view"
    USERS_CREATE = "users.create"
    USERS_CREATE_SUPER_ADMIN = "users.create.super_admin"
    USERS_CREATE_ADMIN = "users.create.admin"
    USERS_CREATE_HR = "users.create.hr"
    USERS_CREATE_MANAGER = "users.create.manager"
    USERS_CREATE_EMPLOYEE = "users.create.employee"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_MANAGE_ROLES = "users.manage_roles"
    USERS_VIEW_SALARY = "users.view_salary"
    USERS_EDIT_SALARY = "users.edit_salary"

    # Organisation
    DEPARTMENTS_VIEW = "departments.view"
    DEPARTMENTS_MANAGE = "departments.manage"
    POSITIONS_VIEW = "positions.view"
    POSITIONS_CREATE = "positions.create"
    POSITIONS_EDIT = "positions.edit"
    POSITIONS_DELETE = "positions.delete"

    # Leaves
    LEAVES_VIEW_OWN = "leaves.view_own"
    LEAVES_VIEW_TEAM = "leaves.view_team"
    LEAVES_VIEW_ALL = "leaves.view_all"
    LEAVES_CREATE = "leaves.create"
    LEAVES_APPROVE = "leaves.approve"
    LEAVES_REJECT = "leaves.reject"

    # Finance
    PAYROLL_VIEW = "payroll.view"
    PAYROLL_VIEW_OWN = "payroll.view_own"
    PAYROLL_MANAGE = "payroll.manage"
    EXPENSES_VIEW = "expenses.view"
    EXPENSES_APPROVE = "expenses.approve"

    # Training & recruitment
    TRAINING_VIEW = "training.view"
    TRAINING_VIEW_OWN = "training.view_own"
    TRAINING_MANAGE = "training.manage"
    RECRUITMENT_VIEW = "recruitment.view"
    RECRUITMENT_MANAGE = "recruitment.manage"

    # Announcements & projects
    ANNOUNCEMENTS_VIEW = "announcements.view"
    ANNOUNCEMENTS_MANAGE = "announcements.manage"
    PROJECTS_VIEW = "projects.view"
    PROJECTS_VIEW_ALL = "projects.view_all"
    TASKS_VIEW = "tasks.view"

    # Reports
    REPORTS_VIEW = "reports.view"
    REPORTS_CREATE = "reports.create"
    ANALYTICS_VIEW = "analytics.view"

    # System
    SYSTEM_ADMIN = "system.admin"
    SYSTEM_SETTINGS = "system.settings"
    ROLES_VIEW = "roles.view"
    ROLES_MANAGE = "roles.manage"
    PERMISSIONS_MANAGE = "permissions.manage"

    # Own profile
    PROFILE_VIEW_OWN = "profile.view_own"
    PROFILE_EDIT_OWN = "profile.edit_own"


class PermissionLike(Protocol):
    name: str
    group_name: str | None
    group_icon: str | None
    sort_order: int


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    label: str
    group_name: str | None = None
    group_icon: str | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class PermissionGroup:
    name: str
    icon: str
    permissions: tuple[Any, ...] = field(default_factory=tuple)


def _group(name: str, icon: str, *entries: tuple[str, str]) -> list[CatalogEntry]:
    return [
        CatalogEntry(name=perm, label=label, group_name=name, group_icon=icon, sort_order=i)
        for i, (perm, label) in enumerate(entries, start=1)
    ]


P = SystemPermissions

CATALOG: tuple[CatalogEntry, ...] = tuple(
    _group(
        "Users", "👤",
        (P.USERS_VIEW, "View users"),
        (P.USERS_CREATE, "Create users"),
        (P.USERS_CREATE_SUPER_ADMIN, "Create super administrators"),
        (P.USERS_CREATE_ADMIN, "Create administrators"),
        (P.USERS_CREATE_HR, "Create HR users"),
        (P.USERS_CREATE_MANAGER, "Create managers"),
        (P.USERS_CREATE_EMPLOYEE, "Create employees"),
        (P.USERS_EDIT, "Edit users"),
        (P.USERS_DELETE, "Delete users"),
        (P.USERS_MANAGE_ROLES, "Assign roles to users"),
        (P.USERS_VIEW_SALARY, "View salaries"),
        (P.USERS_EDIT_SALARY, "Edit salaries"),
    )
    + _group(
        "Organisation", "🏢",
        (P.DEPARTMENTS_VIEW, "View departments"),
        (P.DEPARTMENTS_MANAGE, "Manage departments"),
        (P.POSITIONS_VIEW, "View positions"),
        (P.POSITIONS_CREATE, "Create positions"),
        (P.POSITIONS_EDIT, "Edit positions"),
        (P.POSITIONS_DELETE, "Delete positions"),
    )
    + _group(
        "Leaves", "🏖️",
        (P.LEAVES_VIEW_OWN, "View own leaves"),
        (P.LEAVES_VIEW_TEAM, "View team leaves"),
        (P.LEAVES_VIEW_ALL, "View all leaves"),
        (P.LEAVES_CREATE, "Request leave"),
        (P.LEAVES_APPROVE, "Approve leaves"),
        (P.LEAVES_REJECT, "Reject leaves"),
    )
    + _group(
        "Payroll & Expenses", "💰",
        (P.PAYROLL_VIEW, "View all payroll"),
        (P.PAYROLL_VIEW_OWN, "View own payslips"),
        (P.PAYROLL_MANAGE, "Manage payroll"),
        (P.EXPENSES_VIEW, "View expenses"),
        (P.EXPENSES_APPROVE, "Approve expenses"),
    )
    + _group(
        "Training & Recruitment", "📚",
        (P.TRAINING_VIEW, "View training catalog"),
        (P.TRAINING_VIEW_OWN, "View own training"),
        (P.TRAINING_MANAGE, "Manage training"),
        (P.RECRUITMENT_VIEW, "View recruitment"),
        (P.RECRUITMENT_MANAGE, "Manage recruitment"),
    )
    + _group(
        "Collaboration", "📢",
        (P.ANNOUNCEMENTS_VIEW, "View announcements"),
        (P.ANNOUNCEMENTS_MANAGE, "Manage announcements"),
        (P.PROJECTS_VIEW, "View own projects"),
        (P.PROJECTS_VIEW_ALL, "View all projects"),
        (P.TASKS_VIEW, "View own tasks"),
    )
    + _group(
        "Reports", "📊",
        (P.REPORTS_VIEW, "View reports"),
        (P.REPORTS_CREATE, "Create reports"),
        (P.ANALYTICS_VIEW, "View analytics"),
    )
    + _group(
        "System", "⚙️",
        (P.SYSTEM_ADMIN, "System administration"),
        (P.SYSTEM_SETTINGS, "Application settings"),
        (P.ROLES_VIEW, "View roles"),
        (P.ROLES_MANAGE, "Manage roles"),
        (P.PERMISSIONS_MANAGE, "Manage permissions"),
    )
    + _group(
        "Profile", "🙍",
        (P.PROFILE_VIEW_OWN, "View own profile"),
        (P.PROFILE_EDIT_OWN, "Edit own profile"),
    )
)


def _member_key(perm: PermissionLike) -> tuple[int, str]:
    return (perm.sort_order or 0, perm.name)


def list_permissions(
    permissions: Iterable[PermissionLike] | None,
    group_by: bool = False,
) -> list[Any]:
    """
    Order a catalog for display.

    Ungrouped: by group name, then `sort_order`, then name.
    Grouped: a list of `PermissionGroup`, groups ordered by their lowest
    member `sort_order` then name; members by `sort_order` then name.
    """
    perms = list(permissions or ())
    if not group_by:
        return sorted(perms, key=lambda p: (p.group_name or DEFAULT_GROUP_NAME, *_member_key(p)))

    buckets: dict[str, list[PermissionLike]] = {}
    icons: dict[str, str] = {}
    for perm in perms:
        group_name = perm.group_name or DEFAULT_GROUP_NAME
        buckets.setdefault(group_name, []).append(perm)
        if group_name not in icons or (icons[group_name] == DEFAULT_GROUP_ICON and perm.group_icon):
            icons[group_name] = perm.group_icon or DEFAULT_GROUP_ICON

    groups = [
        PermissionGroup(
            name=group_name,
            icon=icons[group_name],
            permissions=tuple(sorted(members, key=_member_key)),
        )
        for group_name, members in buckets.items()
    ]
    groups.sort(key=lambda g: (min(p.sort_order or 0 for p in g.permissions), g.name))
    return groups


def list_groups(permissions: Iterable[PermissionLike] | None) -> list[dict[str, str]]:
    """Distinct display groups, in the same order as `list_permissions(group_by=True)`."""
    return [{"name": g.name, "icon": g.icon} for g in list_permissions(permissions, group_by=True)]
