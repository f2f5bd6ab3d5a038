"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with a machine-readable code so every
failure can be rendered into the same response envelope.

Example:
    from common.utils import NotFoundException

    @app.get("/projects/{id}")
    async def get_project(id: str):
        project = await projects.find_one({"_id": ObjectId(id)})
        if not project:
            raise NotFoundException("Project not found", code="PROJECT_NOT_FOUND")
        return project
"""

from typing import Optional, Any, Dict, Iterable, List
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.

    Subclasses fix the status and provide a default message and code.
    """

    status: int = 500
    default_message: str = "Request failed"
    default_code: str = "ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        self.message = message or self.default_message
        self.code = code or self.default_code

        detail: Dict[str, Any] = {"message": self.message, "code": self.code}
        if details is not None:
            detail["details"] = details

        super().__init__(status_code=self.status, detail=detail, headers=headers)

    @property
    def errors(self) -> Optional[List[str]]:
        """Individual validation messages, when the exception carries them."""
        details = self.detail.get("details")
        if isinstance(details, dict):
            return details.get("errors")
        return None


class BadRequestException(APIException):
    """400 - Missing/invalid fields, malformed id, rejected file."""

    status = 400
    default_message = "Bad request"
    default_code = "BAD_REQUEST"

    @classmethod
    def from_violations(
        cls,
        violations: Iterable[str],
        code: str = "VALIDATION_ERROR",
    ) -> "BadRequestException":
        """Build a single exception from a list of validation messages."""
        violations = list(violations)
        return cls(", ".join(violations), code=code, details={"errors": violations})


class UnauthorizedException(APIException):
    """401 - Missing, invalid or expired token."""

    status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenException(APIException):
    """403 - Valid token without the admin role."""

    status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


class NotFoundException(APIException):
    """404 - No such document or embedded element."""

    status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class InternalServerException(APIException):
    """500 - Persistence or media-service failure."""

    status = 500
    default_message = "Internal server error"
    default_code = "INTERNAL_ERROR"


# Alias for InternalServerException
ServerException = InternalServerException
