"""
Error Hierarchy - typed exceptions for every failure the API surfaces.

Every error carries:
- message: safe to show to the client
- code: stable machine-readable string
- http_status: status the global handler responds with
- extra: additional top-level keys for the response body (e.g. hasApplied)

Route handlers raise these; app/api/error_handlers.py turns them into
{"success": false, "message": ..., "code": ...} responses.
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base exception for all job portal errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        http_status: int = 500,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.extra = extra or {}

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        return {"success": False, "message": self.message, "code": self.code, **self.extra}


# ============================================================
# IDENTITY ERRORS
# ============================================================

class AuthenticationError(PortalError):
    """Missing, malformed, badly signed or expired credential."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, "AUTHENTICATION_ERROR", 401)


class AuthorizationError(PortalError):
    """Valid credential, but wrong role or not the resource owner."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, "AUTHORIZATION_ERROR", 403)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class NotFoundError(PortalError):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, "NOT_FOUND", 404)


class DuplicateActionError(PortalError):
    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DUPLICATE_ACTION", 400, extra)


class DuplicateApplicationError(DuplicateActionError):
    """Raised when (job, applicant) already has an application record."""

    def __init__(self, message: str = "You have already applied for this job"):
        super().__init__(message, {"hasApplied": True})


class BusinessRuleError(PortalError):
    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE", 400)


class ConflictError(PortalError):
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 400)


class InvalidUploadError(PortalError):
    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_UPLOAD", 400, extra)


class FileTooLargeError(PortalError):
    def __init__(self, message: str):
        super().__init__(message, "FILE_TOO_LARGE", 413)


# ============================================================
# NOTIFICATION ERRORS (never surfaced over HTTP)
# ============================================================

class EventPayloadError(PortalError):
    """Event payload cannot be serialized to JSON."""

    def __init__(self, message: str):
        super().__init__(message, "EVENT_PAYLOAD", 500)
