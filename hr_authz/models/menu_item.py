from __future__ import annotations

"""
MenuItem model.

A self-referencing table; only two levels (top-level entries and their
direct children) are meaningful to the menu filter.  Entries are
soft-disabled through `is_active` rather than deleted so their
permission gate survives.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from typing import TYPE_CHECKING

from hr_authz.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin

if TYPE_CHECKING:
    from hr_authz.models.permission import Permission


class MenuItem(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "menu_items"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(32), nullable=True)
    path: Mapped[str | None] = mapped_column(String(256), nullable=True)
    section: Mapped[str] = mapped_column(String(32), default="main", nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    permission_id: Mapped[int | None] = mapped_column(
        ForeignKey("permissions.id", ondelete="RESTRICT"),
        nullable=True,
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("menu_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ── Relationships ────────────────────────────────────────────────
    permission: Mapped["Permission | None"] = relationship(  # noqa: F821
        lazy="selectin",
    )

    @property
    def permission_name(self) -> str | None:
        return self.permission.name if self.permission is not None else None

    def __repr__(self) -> str:
        return f"<MenuItem {self.name}>"
