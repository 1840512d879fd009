"""
Domain-specific HTTP exceptions.

Each exception carries a preset status code and detail message so services can
raise them without knowing about HTTP. The error envelope middleware wraps them
in the standard ``{"error": {...}}`` body.
"""
from fastapi import HTTPException, status


# ── Authentication ────────────────────────────────────────────────────────────

class NotAuthenticated(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login required.",
        )


# ── Lookup ────────────────────────────────────────────────────────────────────

class ProfileNotFound(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found.",
        )


# ── Validation ────────────────────────────────────────────────────────────────

class MissingRequiredField(HTTPException):
    """A required request field was absent or blank."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Missing required field: {field}.",
        )


class InvalidField(HTTPException):
    """A request field was present but could not be read as the expected type."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid value for field: {field}.",
        )


# ── Storage ───────────────────────────────────────────────────────────────────

class StorageFailure(HTTPException):
    """A profile, interaction or preference store call failed.

    The whole operation is abandoned: no partial ranking, no partial model.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Storage operation failed: {operation}.",
        )
