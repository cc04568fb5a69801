from __future__ import annotations

"""
User model (only the columns the authorization core consumes).

Design decisions:
- `role` is the legacy enum value, stored as a plain string rather than
  a DB enum so a corrupted value can still be loaded and rejected by the
  resolver instead of blowing up inside the ORM.
- `role_id` optionally links a custom Role.  Deleting that role sets it
  to NULL; the legacy value then governs alone.
"""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_authz.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hr_authz.models.role import Role


class User(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(256), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="ROLE_EMPLOYEE")
    role_id: Mapped[int | None] = mapped_column(
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # ── Relationships ────────────────────────────────────────────────
    custom_role: Mapped["Role | None"] = relationship(  # noqa: F821
        foreign_keys=[role_id],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
