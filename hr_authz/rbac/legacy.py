"""
Legacy fixed-role enum and its fallback permission table.

Every user carries exactly one `UserRole` value.  The permissions mapped
here are the *floor* of that user's effective set: a linked custom role
can add to it but never take anything away.

The table is code, not data, and is not editable at runtime.
"""

import enum

from hr_authz.rbac.catalog import SystemPermissions as P

# Distinguished name that satisfies every permission check.
WILDCARD_PERMISSION = "*"


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "ROLE_SUPER_ADMIN"
    ADMIN = "ROLE_ADMIN"
    MANAGER = "ROLE_MANAGER"
    HR = "ROLE_RH"
    EMPLOYEE = "ROLE_EMPLOYEE"

    @classmethod
    def parse(cls, value: object) -> "UserRole | None":
        """Return the member for `value`, or None if it isn't one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Both admin tiers also carry roles.view / roles.manage, which gate the
# role administration routes.
ENUM_FALLBACK_TABLE: dict[UserRole, frozenset[str]] = {
    UserRole.SUPER_ADMIN: frozenset(
        {
            P.SYSTEM_ADMIN,
            P.USERS_VIEW,
            P.USERS_CREATE,
            P.USERS_CREATE_SUPER_ADMIN,
            P.USERS_CREATE_ADMIN,
            P.USERS_CREATE_HR,
            P.USERS_CREATE_MANAGER,
            P.USERS_CREATE_EMPLOYEE,
            P.USERS_EDIT,
            P.USERS_DELETE,
            P.USERS_MANAGE_ROLES,
            P.REPORTS_VIEW,
            P.REPORTS_CREATE,
            P.ANALYTICS_VIEW,
            P.SYSTEM_SETTINGS,
            P.ROLES_VIEW,
            P.ROLES_MANAGE,
            P.PERMISSIONS_MANAGE,
        }
    ),
    UserRole.ADMIN: frozenset(
        {
            P.SYSTEM_ADMIN,
            P.USERS_VIEW,
            P.USERS_CREATE,
            P.USERS_CREATE_ADMIN,
            P.USERS_CREATE_MANAGER,
            P.USERS_CREATE_EMPLOYEE,
            P.USERS_EDIT,
            P.USERS_DELETE,
            P.USERS_MANAGE_ROLES,
            P.REPORTS_VIEW,
            P.REPORTS_CREATE,
            P.ANALYTICS_VIEW,
            P.DEPARTMENTS_VIEW,
            P.DEPARTMENTS_MANAGE,
            P.POSITIONS_VIEW,
            P.POSITIONS_CREATE,
            P.POSITIONS_EDIT,
            P.POSITIONS_DELETE,
            P.ROLES_VIEW,
            P.ROLES_MANAGE,
        }
    ),
    UserRole.HR: frozenset(
        {
            P.USERS_VIEW,
            P.USERS_CREATE,
            P.USERS_CREATE_MANAGER,
            P.USERS_CREATE_EMPLOYEE,
            P.USERS_EDIT,
            P.USERS_VIEW_SALARY,
            P.USERS_EDIT_SALARY,
            P.DEPARTMENTS_VIEW,
            P.DEPARTMENTS_MANAGE,
            P.POSITIONS_VIEW,
            P.POSITIONS_CREATE,
            P.POSITIONS_EDIT,
            P.LEAVES_VIEW_ALL,
            P.LEAVES_APPROVE,
            P.LEAVES_REJECT,
            P.PAYROLL_VIEW,
            P.PAYROLL_MANAGE,
            P.REPORTS_VIEW,
            P.REPORTS_CREATE,
        }
    ),
    UserRole.MANAGER: frozenset(
        {
            P.USERS_VIEW,
            P.USERS_EDIT,
            P.REPORTS_VIEW,
            P.REPORTS_CREATE,
            P.DEPARTMENTS_VIEW,
            P.POSITIONS_VIEW,
            P.LEAVES_VIEW_TEAM,
            P.LEAVES_APPROVE,
            P.LEAVES_REJECT,
            P.PROFILE_VIEW_OWN,
            P.PROFILE_EDIT_OWN,
        }
    ),
    UserRole.EMPLOYEE: frozenset(
        {
            P.USERS_VIEW,
            P.LEAVES_VIEW_OWN,
            P.LEAVES_CREATE,
            P.PROFILE_VIEW_OWN,
            P.PROFILE_EDIT_OWN,
        }
    ),
}

# Display metadata for the system role seeded per enum value.
SYSTEM_ROLE_DEFINITIONS: dict[UserRole, dict[str, str]] = {
    UserRole.SUPER_ADMIN: {
        "name": "Super Administrator",
        "description": "Full access to every feature of the system",
        "color": "#dc2626",
        "icon": "👑",
    },
    UserRole.ADMIN: {
        "name": "Administrator",
        "description": "Global administration of the system and its users",
        "color": "#ea580c",
        "icon": "🛡️",
    },
    UserRole.HR: {
        "name": "HR Manager",
        "description": "Full human-resources management",
        "color": "#0891b2",
        "icon": "👥",
    },
    UserRole.MANAGER: {
        "name": "Manager",
        "description": "Team management and request approval",
        "color": "#7c3aed",
        "icon": "👨‍💼",
    },
    UserRole.EMPLOYEE: {
        "name": "Employee",
        "description": "Baseline access for employees",
        "color": "#6b7280",
        "icon": "👤",
    },
}
