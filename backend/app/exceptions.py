"""Domain errors raised by the service layer.

Services raise these instead of ``HTTPException`` so the consistency core stays
usable outside a request. ``app.main`` renders every ``TrackerError`` as JSON using
the ``status_code`` carried by the class.
"""

from typing import Any, Dict, Optional


class TrackerError(Exception):
    """Base class for all tracker errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(TrackerError):
    """Input is missing or not acceptable."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field} if field else None)


class NotFoundError(TrackerError):
    """A referenced project, comment or user does not exist."""

    status_code = 404

    def __init__(self, resource_type: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} not found.",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type},
        )


class AuthorizationError(TrackerError):
    """Caller's role or assignment does not allow the action."""

    status_code = 403

    def __init__(self, message: str = "Not authorized", required_role: Optional[str] = None):
        super().__init__(
            message,
            code="NOT_AUTHORIZED",
            details={"required_role": required_role} if required_role else None,
        )


class PersistenceError(TrackerError):
    """The underlying store call failed."""

    status_code = 500

    def __init__(self, message: str = "Storage operation failed.", table: Optional[str] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", details={"table": table} if table else None)
