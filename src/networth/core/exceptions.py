"""Application-level exceptions."""

from typing import Any, Optional


class AppError(Exception):
    """Base exception for errors reported to API callers."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """JSON body for the error response."""
        return {"error": self.code, "message": self.message}


class ValidationError(AppError):
    """Raised when request input is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body
