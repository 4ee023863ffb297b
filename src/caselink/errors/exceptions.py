"""Custom exception classes for the CaseLink API."""


class CaseLinkError(Exception):
    """Base exception for CaseLink."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CaseLinkError):
    """Schema or request validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(CaseLinkError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(CaseLinkError):
    """Authentication required or token invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(CaseLinkError):
    """Role or org-membership mismatch.

    The message only names the relationship the action requires, never why
    the caller failed it.
    """

    def __init__(self, requirement: str | None = None):
        message = f"Not allowed: requires {requirement}" if requirement else "Not allowed"
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(CaseLinkError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class InvalidTransitionError(CaseLinkError):
    """Connection status change attempted from a disallowed source state."""

    def __init__(self, current: str, action: str):
        super().__init__(
            "INVALID_TRANSITION",
            f"Cannot {action} a connection that is '{current}'",
            details={"status": current, "action": action},
            status_code=409,
        )
