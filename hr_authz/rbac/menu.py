"""
Navigation menu tree & per-principal filter.

The tree has exactly two meaningful levels:

    MenuGroup  — top-level heading, optionally navigable, with children
    MenuLink   — a navigable entry (top-level or child)

Either kind may carry a `permission` gate (a permission name); `None`
means visible to everyone.  `filter_for_principal` prunes a tree
against an effective permission set; it is pure, total and idempotent.
"""

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from hr_authz.rbac.guard import Allow, authorize

DEFAULT_SECTION = "main"

# Fixed layout order of known sections.
SECTION_LABELS: dict[str, str] = {
    "main": "HR Management",
    "advanced": "Advanced Modules",
    "hrms": "HRMS Modules",
}


@dataclass(frozen=True)
class MenuLink:
    id: int
    name: str
    path: str | None = None
    icon: str | None = None
    section: str = DEFAULT_SECTION
    sort_order: int = 0
    is_active: bool = True
    permission: str | None = None


@dataclass(frozen=True)
class MenuGroup:
    id: int
    name: str
    children: tuple[MenuLink, ...] = field(default_factory=tuple)
    path: str | None = None
    icon: str | None = None
    section: str = DEFAULT_SECTION
    sort_order: int = 0
    is_active: bool = True
    permission: str | None = None


MenuEntry = MenuLink | MenuGroup


@dataclass(frozen=True)
class MenuSection:
    key: str
    label: str
    items: tuple[MenuEntry, ...]


def _entry_key(entry: MenuEntry) -> tuple[int, int]:
    return (entry.sort_order, entry.id)


def _section_rank(section: str) -> tuple[int, str]:
    order = list(SECTION_LABELS)
    if section in SECTION_LABELS:
        return (order.index(section), "")
    return (len(order), section)


def _gate_passes(entry: MenuEntry, effective: Collection[str]) -> bool:
    return isinstance(authorize(effective, entry.permission), Allow)


def build_menu_tree(rows: Iterable[Any]) -> tuple[MenuEntry, ...]:
    """
    Build top-level nodes from flat `MenuItem`-like rows.

    Rows need `id`, `name`, `path`, `icon`, `section`, `sort_order`,
    `is_active`, `parent_id` and `permission_name`.  Grandchildren and
    children of unknown parents are dropped: only two levels count.
    """
    rows = list(rows)
    top = [r for r in rows if r.parent_id is None]
    top_ids = {r.id for r in top}

    children: dict[int, list[MenuLink]] = {}
    for row in rows:
        if row.parent_id is None or row.parent_id not in top_ids:
            continue
        children.setdefault(row.parent_id, []).append(
            MenuLink(
                id=row.id,
                name=row.name,
                path=row.path or None,
                icon=row.icon,
                section=row.section or DEFAULT_SECTION,
                sort_order=row.sort_order or 0,
                is_active=bool(row.is_active),
                permission=row.permission_name,
            )
        )

    tree: list[MenuEntry] = []
    for row in top:
        kids = tuple(sorted(children.get(row.id, ()), key=_entry_key))
        common = dict(
            id=row.id,
            name=row.name,
            path=row.path or None,
            icon=row.icon,
            section=row.section or DEFAULT_SECTION,
            sort_order=row.sort_order or 0,
            is_active=bool(row.is_active),
            permission=row.permission_name,
        )
        if kids or not row.path:
            tree.append(MenuGroup(children=kids, **common))
        else:
            tree.append(MenuLink(**common))
    return sort_tree(tree)


def sort_tree(tree: Iterable[MenuEntry]) -> tuple[MenuEntry, ...]:
    """Section order, then `sort_order`; children by their own `sort_order`."""
    return tuple(
        sorted(tree, key=lambda e: (_section_rank(e.section or DEFAULT_SECTION), _entry_key(e)))
    )


def filter_for_principal(tree: Sequence[MenuEntry], effective: Collection[str]) -> tuple[MenuEntry, ...]:
    """
    Prune `tree` for a principal holding `effective`.

    - inactive entries are skipped at both levels;
    - a child survives iff its gate passes;
    - a top-level entry survives iff its gate passes AND it has a path
      or at least one surviving child.
    """
    result: list[MenuEntry] = []
    for entry in tree:
        if not entry.is_active or not _gate_passes(entry, effective):
            continue
        if isinstance(entry, MenuGroup):
            kids = tuple(
                sorted(
                    (c for c in entry.children if c.is_active and _gate_passes(c, effective)),
                    key=_entry_key,
                )
            )
            if not entry.path and not kids:
                continue
            result.append(replace(entry, children=kids))
        elif entry.path:
            result.append(entry)
    return sort_tree(result)


def group_by_section(tree: Iterable[MenuEntry]) -> list[MenuSection]:
    """Group top-level entries for layout; unknown sections keep their raw tag."""
    buckets: dict[str, list[MenuEntry]] = {}
    for entry in tree:
        buckets.setdefault(entry.section or DEFAULT_SECTION, []).append(entry)
    return [
        MenuSection(
            key=key,
            label=SECTION_LABELS.get(key, key),
            items=tuple(sorted(items, key=_entry_key)),
        )
        for key, items in sorted(buckets.items(), key=lambda kv: _section_rank(kv[0]))
    ]


@dataclass(frozen=True)
class MenuVisibility:
    entry_id: int
    name: str
    visible: bool
    reason: str | None = None
    visible_children: tuple[str, ...] = ()


def explain_visibility(tree: Sequence[MenuEntry], effective: Collection[str]) -> list[MenuVisibility]:
    """Per top-level entry: is it shown, and if not, why."""
    shown = {e.id: e for e in filter_for_principal(tree, effective)}
    report: list[MenuVisibility] = []
    for entry in sort_tree(tree):
        if entry.id in shown:
            kept = shown[entry.id]
            kids = tuple(c.name for c in kept.children) if isinstance(kept, MenuGroup) else ()
            report.append(MenuVisibility(entry.id, entry.name, True, visible_children=kids))
            continue
        if not entry.is_active:
            reason = "inactive"
        elif not _gate_passes(entry, effective):
            reason = f"missing permission {entry.permission}"
        else:
            reason = "no path and no visible children"
        report.append(MenuVisibility(entry.id, entry.name, False, reason=reason))
    return report
