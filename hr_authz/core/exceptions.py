"""Exception taxonomy for the authorization core."""

from typing import Any


class AuthorizationCoreError(Exception):
    """Base exception for the authorization core."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidPrincipalState(AuthorizationCoreError):
    """Raised when a principal's legacy role value is not recognized.

    Fatal for the request. Never downgraded to a default role.
    """

    def __init__(self, user_id: Any, value: Any):
        self.user_id = user_id
        self.value = value
        super().__init__(f"User {user_id} has unrecognized role value {value!r}")


class PermissionMissing(AuthorizationCoreError):
    """The expected "access denied" outcome for a required permission."""

    def __init__(self, permission: str):
        self.permission = permission
        super().__init__(f"Missing permission: {permission}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionMissing):
            return NotImplemented
        return self.permission == other.permission

    def __hash__(self) -> int:
        return hash(("PermissionMissing", self.permission))

    def __repr__(self) -> str:
        return f"PermissionMissing({self.permission!r})"


class MalformedLegacyPermissionData(AuthorizationCoreError):
    """Legacy JSON permission mirror is present but not a list of strings.

    Only raised by the strict parser; role resolution catches it and
    carries on with the relational bindings.
    """

    def __init__(self, role_id: Any, raw: Any):
        self.role_id = role_id
        self.raw = raw
        super().__init__(f"Role {role_id} has malformed legacy permissions: {raw!r}")


class ResourceNotFoundError(AuthorizationCoreError):
    """Raised when a requested resource is not found."""
    pass


class ResourceConflictError(AuthorizationCoreError):
    """Raised when an operation conflicts with existing state."""
    pass
