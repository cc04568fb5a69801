"""
Tests — Menu Tree & Filter
==========================
Tree building from flat rows, per-principal pruning, section layout.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from hr_authz.rbac.legacy import ENUM_FALLBACK_TABLE, WILDCARD_PERMISSION, UserRole
from hr_authz.rbac.menu import (
    SECTION_LABELS,
    MenuGroup,
    MenuLink,
    build_menu_tree,
    explain_visibility,
    filter_for_principal,
    group_by_section,
)


# ── Helpers ──────────────────────────────────────────────────


def _row(id, name, path=None, parent_id=None, permission=None, section="main", sort_order=0, is_active=True):
    return SimpleNamespace(
        id=id,
        name=name,
        path=path,
        icon=None,
        section=section,
        sort_order=sort_order,
        is_active=is_active,
        parent_id=parent_id,
        permission_name=permission,
    )


ROWS = [
    _row(1, "Dashboard", "/", permission="reports.view", sort_order=1),
    _row(2, "Attendance", "/attendance", sort_order=2),
    _row(3, "Training", section="hrms", sort_order=1),
    _row(4, "My Training", "/training/mine", parent_id=3, permission="training.view_own", section="hrms"),
    _row(5, "Leaves", sort_order=3),
    _row(6, "Leave Review", "/leaves/review", parent_id=5, permission="leaves.approve", sort_order=2),
    _row(7, "My Leaves", "/leaves/mine", parent_id=5, permission="leaves.view_own", sort_order=1),
    _row(8, "Administration", section="advanced", permission="system.admin", sort_order=1),
    _row(9, "Settings", "/settings", parent_id=8, permission="system.settings", section="advanced"),
    _row(10, "Labs", "/labs", section="zeta", sort_order=1),
    _row(11, "Beta", "/beta", section="alpha", sort_order=1),
]

TREE = build_menu_tree(ROWS)
EMPLOYEE = ENUM_FALLBACK_TABLE[UserRole.EMPLOYEE]

PERMISSION_SETS = [
    frozenset(),
    EMPLOYEE,
    ENUM_FALLBACK_TABLE[UserRole.ADMIN],
    frozenset({"system.admin"}),
    frozenset({"training.view_own", "leaves.approve"}),
    frozenset({WILDCARD_PERMISSION}),
]


def _names(tree):
    return [entry.name for entry in tree]


def _find(tree, name):
    return next(entry for entry in tree if entry.name == name)


# ══════════════════════════════════════════════════════════════
# TREE BUILDING
# ══════════════════════════════════════════════════════════════


class TestBuildMenuTree:
    def test_parents_become_groups(self):
        assert isinstance(_find(TREE, "Leaves"), MenuGroup)
        assert isinstance(_find(TREE, "Attendance"), MenuLink)

    def test_pathless_entry_without_children_is_a_group(self):
        tree = build_menu_tree([_row(1, "Empty")])
        assert isinstance(tree[0], MenuGroup)
        assert tree[0].children == ()

    def test_children_sorted(self):
        assert _names(_find(TREE, "Leaves").children) == ["My Leaves", "Leave Review"]

    def test_grandchildren_and_orphans_are_dropped(self):
        rows = [
            _row(1, "Top"),
            _row(2, "Child", "/child", parent_id=1),
            _row(3, "Grandchild", "/gc", parent_id=2),
            _row(4, "Orphan", "/orphan", parent_id=99),
        ]
        tree = build_menu_tree(rows)
        assert _names(tree) == ["Top"]
        assert _names(tree[0].children) == ["Child"]

    def test_sections_in_fixed_order_then_unknown_by_tag(self):
        assert _names(TREE) == [
            "Dashboard", "Attendance", "Leaves",
            "Administration",
            "Training",
            "Beta", "Labs",
        ]


# ══════════════════════════════════════════════════════════════
# FILTERING
# ══════════════════════════════════════════════════════════════


class TestFilterForPrincipal:
    def test_employee_scenario(self):
        menu = filter_for_principal(TREE, EMPLOYEE)
        names = _names(menu)
        assert "Attendance" in names
        assert "Training" not in names
        assert "Dashboard" not in names
        assert _names(_find(menu, "Leaves").children) == ["My Leaves"]

    def test_parent_gate_hides_children(self):
        menu = filter_for_principal(TREE, {"system.settings"})
        assert "Administration" not in _names(menu)

    def test_wildcard_sees_everything(self):
        menu = filter_for_principal(TREE, {WILDCARD_PERMISSION})
        assert _names(menu) == _names(TREE)
        assert _names(_find(menu, "Leaves").children) == ["My Leaves", "Leave Review"]

    def test_gated_group_with_path_survives_without_children(self):
        tree = build_menu_tree([
            _row(1, "Reports", "/reports", permission="reports.view"),
            _row(2, "Analytics", "/reports/a", parent_id=1, permission="analytics.view"),
        ])
        menu = filter_for_principal(tree, {"reports.view"})
        assert _names(menu) == ["Reports"]
        assert menu[0].children == ()

    def test_inactive_entries_are_skipped(self):
        tree = build_menu_tree([
            _row(1, "Off", "/off", is_active=False),
            _row(2, "Group"),
            _row(3, "Hidden child", "/hidden", parent_id=2, is_active=False),
        ])
        assert filter_for_principal(tree, {WILDCARD_PERMISSION}) == ()

    def test_empty_tree(self):
        assert filter_for_principal((), EMPLOYEE) == ()

    @pytest.mark.parametrize("effective", PERMISSION_SETS)
    def test_idempotent(self, effective):
        once = filter_for_principal(TREE, effective)
        assert filter_for_principal(once, effective) == once

    @pytest.mark.parametrize("effective", PERMISSION_SETS)
    def test_no_empty_pathless_parent(self, effective):
        for entry in filter_for_principal(TREE, effective):
            if isinstance(entry, MenuGroup) and not entry.path:
                assert entry.children

    def test_input_tree_untouched(self):
        before = _find(TREE, "Leaves").children
        filter_for_principal(TREE, frozenset())
        assert _find(TREE, "Leaves").children == before


# ══════════════════════════════════════════════════════════════
# SECTIONS
# ══════════════════════════════════════════════════════════════


class TestGroupBySection:
    def test_known_sections_first_with_labels(self):
        sections = group_by_section(filter_for_principal(TREE, {WILDCARD_PERMISSION}))
        assert [s.key for s in sections] == ["main", "advanced", "hrms", "alpha", "zeta"]
        assert sections[0].label == SECTION_LABELS["main"]
        assert sections[3].label == "alpha"

    def test_empty_sections_are_omitted(self):
        sections = group_by_section(filter_for_principal(TREE, EMPLOYEE))
        assert "advanced" not in [s.key for s in sections]


# ══════════════════════════════════════════════════════════════
# VISIBILITY REPORT
# ══════════════════════════════════════════════════════════════


class TestExplainVisibility:
    def test_reasons(self):
        tree = build_menu_tree([
            _row(1, "Off", "/off", is_active=False, sort_order=1),
            _row(2, "Gated", "/gated", permission="payroll.manage", sort_order=2),
            _row(3, "Hollow", sort_order=3),
            _row(4, "Shown", "/shown", sort_order=4),
        ])
        report = {row.name: row for row in explain_visibility(tree, frozenset())}
        assert report["Off"].reason == "inactive"
        assert report["Gated"].reason == "missing permission payroll.manage"
        assert report["Hollow"].reason == "no path and no visible children"
        assert report["Shown"].visible

    def test_lists_visible_children(self):
        report = {row.name: row for row in explain_visibility(TREE, EMPLOYEE)}
        assert report["Leaves"].visible_children == ("My Leaves",)
