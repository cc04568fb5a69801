"""
Authorization guard — the allow/deny decision for one operation.

`authorize` is a pure function of (effective set, required permission);
it knows nothing about HTTP.  The FastAPI enforcement point lives in
`hr_authz.rbac.dependencies`.
"""

from collections.abc import Collection
from dataclasses import dataclass

from hr_authz.core.exceptions import PermissionMissing
from hr_authz.rbac.legacy import WILDCARD_PERMISSION


@dataclass(frozen=True)
class Allow:
    allowed: bool = True


@dataclass(frozen=True)
class Deny:
    reason: PermissionMissing
    allowed: bool = False

    def raise_for(self) -> None:
        raise self.reason


Decision = Allow | Deny

ALLOW = Allow()


def authorize(effective: Collection[str], required: str | None) -> Decision:
    if not required:
        return ALLOW
    if WILDCARD_PERMISSION in effective or required in effective:
        return ALLOW
    return Deny(PermissionMissing(required))


def authorize_all(effective: Collection[str], *required: str) -> Decision:
    """First denial among `required`, or Allow if every one passes."""
    for name in required:
        decision = authorize(effective, name)
        if isinstance(decision, Deny):
            return decision
    return ALLOW


def ensure_authorized(effective: Collection[str], *required: str) -> None:
    """Raise `PermissionMissing` unless every `required` name is granted."""
    decision = authorize_all(effective, *required)
    if isinstance(decision, Deny):
        decision.raise_for()
