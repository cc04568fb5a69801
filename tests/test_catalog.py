"""
Tests — Permission Catalog
==========================
Ordering and grouping of permission-like objects.
"""

from __future__ import annotations

from hr_authz.rbac.catalog import (
    CATALOG,
    DEFAULT_GROUP_ICON,
    DEFAULT_GROUP_NAME,
    CatalogEntry,
    PermissionGroup,
    SystemPermissions,
    list_groups,
    list_permissions,
)
from hr_authz.rbac.legacy import ENUM_FALLBACK_TABLE


# ── Helpers ──────────────────────────────────────────────────


def _entry(name: str, group: str | None = None, order: int = 0, icon: str | None = None) -> CatalogEntry:
    return CatalogEntry(name=name, label=name, group_name=group, group_icon=icon, sort_order=order)


# ══════════════════════════════════════════════════════════════
# CATALOG CONTENT
# ══════════════════════════════════════════════════════════════


class TestCatalogContent:
    def test_names_are_unique(self):
        names = [entry.name for entry in CATALOG]
        assert len(names) == len(set(names))

    def test_every_enum_floor_name_is_catalogued(self):
        names = {entry.name for entry in CATALOG}
        for floor in ENUM_FALLBACK_TABLE.values():
            assert floor <= names

    def test_every_constant_is_catalogued(self):
        names = {entry.name for entry in CATALOG}
        constants = {
            value for key, value in vars(SystemPermissions).items() if key.isupper()
        }
        assert constants == names


# ══════════════════════════════════════════════════════════════
# LISTING
# ══════════════════════════════════════════════════════════════


class TestListPermissions:
    def test_empty_or_missing_catalog(self):
        assert list_permissions([]) == []
        assert list_permissions(None) == []
        assert list_permissions(None, group_by=True) == []
        assert list_groups(None) == []

    def test_flat_order(self):
        perms = [
            _entry("b.two", "B", 2),
            _entry("a.two", "A", 2),
            _entry("a.one", "A", 1),
            _entry("b.one", "B", 1),
            _entry("a.zzz", "A", 1),
        ]
        ordered = [p.name for p in list_permissions(perms)]
        assert ordered == ["a.one", "a.zzz", "a.two", "b.one", "b.two"]

    def test_grouped(self):
        perms = [
            _entry("leaves.approve", "Leaves", 2, "🏖️"),
            _entry("users.view", "Users", 1, "👤"),
            _entry("leaves.view_own", "Leaves", 1, "🏖️"),
            _entry("late.one", "Late", 5),
        ]
        groups = list_permissions(perms, group_by=True)
        assert all(isinstance(g, PermissionGroup) for g in groups)
        assert [g.name for g in groups] == ["Leaves", "Users", "Late"]
        assert [p.name for p in groups[0].permissions] == ["leaves.view_own", "leaves.approve"]
        assert groups[0].icon == "🏖️"
        assert groups[2].icon == DEFAULT_GROUP_ICON

    def test_ungrouped_permissions_fall_into_other(self):
        groups = list_permissions([_entry("misc.thing")], group_by=True)
        assert groups[0].name == DEFAULT_GROUP_NAME
        assert groups[0].icon == DEFAULT_GROUP_ICON

    def test_list_groups_follows_grouped_order(self):
        perms = [_entry("x", "Second", 3, "2️⃣"), _entry("y", "First", 1, "1️⃣")]
        assert list_groups(perms) == [
            {"name": "First", "icon": "1️⃣"},
            {"name": "Second", "icon": "2️⃣"},
        ]

    def test_listing_is_pure(self):
        perms = [_entry("b", "G", 2), _entry("a", "G", 1)]
        list_permissions(perms, group_by=True)
        assert [p.name for p in perms] == ["b", "a"]
