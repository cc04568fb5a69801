"""
RBAC dependencies — the enforcement point.

`require_permission` is a *dependency factory*:  call it with one or
more permission names and it returns a FastAPI dependency that will:

1. Read the user id from the bearer token.
2. Load the principal and its custom role (once per request).
3. Resolve the effective permission set.
4. Run the guard for every required name.
5. Raise `PermissionMissing` (→ 403) on the first denial, before the
   route body runs.

Usage in a route:
    @router.get("/roles", dependencies=[Depends(require_permission("roles.view"))])
    async def list_roles(...): ...

Or inject the principal:
    @router.get("/me")
    async def me(principal: Principal = Depends(require_permission("profile.view_own"))): ...
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from hr_authz.core.database import get_db
from hr_authz.core.exceptions import InvalidPrincipalState, ResourceNotFoundError
from hr_authz.core.security import get_current_user_id
from hr_authz.rbac.guard import Deny, authorize_all
from hr_authz.rbac.principal import Principal
from hr_authz.rbac.resolver import resolve
from hr_authz.services.principal_service import load_principal_with_role

logger = logging.getLogger("rbac")


async def get_current_principal(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Load the caller, resolving their effective set once per request."""
    cached = getattr(request.state, "principal", None)
    if cached is not None and cached.user_id == user_id:
        return cached

    try:
        principal, role = await load_principal_with_role(user_id, db)
    except ResourceNotFoundError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    try:
        effective = resolve(principal, role)
    except InvalidPrincipalState as exc:
        logger.error("Cannot resolve permissions: %s", exc.message)
        raise

    request.state.principal = principal
    request.state.effective_permissions = effective
    return principal


async def get_effective_permissions(
    request: Request,
    principal: Principal = Depends(get_current_principal),
) -> frozenset[str]:
    return request.state.effective_permissions


async def get_active_principal(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Authenticated and active — no permission check."""
    if not principal.active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")
    return principal


class require_permission:
    """
    Dependency factory.

    Can be used as:
        Depends(require_permission("roles.view"))
        Depends(require_permission("leaves.view_all", "leaves.approve"))
    """

    def __init__(self, *permission_names: str):
        self.required = permission_names

    async def __call__(
        self,
        principal: Principal = Depends(get_active_principal),
        effective: frozenset[str] = Depends(get_effective_permissions),
    ) -> Principal:
        decision = authorize_all(effective, *self.required)
        if isinstance(decision, Deny):
            logger.info(
                "Permission denied for user %s — missing: %s",
                principal.user_id,
                decision.reason.permission,
            )
            decision.raise_for()
        return principal
