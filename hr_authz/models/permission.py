from __future__ import annotations

"""
Permission model.

Permissions are dot-namespaced capability names (e.g. `leaves.approve`).
They are seeded from the catalog and referenced by role bindings and
menu gates.  A permission that is still bound to a role or gates a
menu entry cannot be deleted (`RESTRICT` on both FKs).
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from typing import TYPE_CHECKING

from hr_authz.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin

if TYPE_CHECKING:
    from hr_authz.models.role import RolePermission


class Permission(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    label: Mapped[str | None] = mapped_column(String(256), nullable=True)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True)
    group_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    group_icon: Mapped[str | None] = mapped_column(String(32), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # ── Relationships ────────────────────────────────────────────────
    role_bindings: Mapped[list["RolePermission"]] = relationship(  # noqa: F821
        back_populates="permission",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Permission {self.name}>"
