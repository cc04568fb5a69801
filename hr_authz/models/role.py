from __future__ import annotations

"""
Role model & the role ↔ permission binding entity.

Roles are named bundles of permissions.  The binding is an explicit
association object (not a bare `secondary` table) because each binding
carries its own `created_at` and is added/removed independently of
either side.

`permissions` is the legacy JSON mirror from the pre-relational era.
It is read as an additive fallback only and may be stale or malformed.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from typing import TYPE_CHECKING

from hr_authz.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin

if TYPE_CHECKING:
    from hr_authz.models.permission import Permission


class RolePermission(Base):
    __tablename__ = "role_permissions"

    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id: Mapped[int] = mapped_column(
        ForeignKey("permissions.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────
    role: Mapped["Role"] = relationship(back_populates="bindings")
    permission: Mapped["Permission"] = relationship(  # noqa: F821
        back_populates="role_bindings",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<RolePermission role={self.role_id} permission={self.permission_id}>"


class Role(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(256), nullable=True)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(32), nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Legacy enum value this system role stands for (NULL for custom roles).
    enum_equivalent: Mapped[str | None] = mapped_column(String(32), nullable=True)
    permissions: Mapped[Any] = mapped_column(JSON, nullable=True)

    # ── Relationships ────────────────────────────────────────────────
    bindings: Mapped[list[RolePermission]] = relationship(
        back_populates="role",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def bound_permission_names(self) -> set[str]:
        return {b.permission.name for b in self.bindings if b.permission is not None}

    def __repr__(self) -> str:
        return f"<Role {self.name}>"
