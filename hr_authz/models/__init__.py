"""
Models package — import every model so SQLAlchemy's Base.metadata
knows about all tables (critical for `create_all` / Alembic).
"""

from hr_authz.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from hr_authz.models.permission import Permission
from hr_authz.models.role import Role, RolePermission
from hr_authz.models.user import User
from hr_authz.models.menu_item import MenuItem

__all__ = [
    "Base",
    "IntegerPrimaryKeyMixin",
    "TimestampMixin",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "MenuItem",
]
