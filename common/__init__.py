"""
Common library for reusable infrastructure components.

- database: Async MongoDB connection (Motor) and ObjectId helpers
- auth: Pluggable token verification (JWT)
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth
from common.utils import (
    success_response,
    error_response,
    paginated_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    InternalServerException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    # Utils
    "success_response",
    "error_response",
    "paginated_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "InternalServerException",
    # Config
    "BaseAppSettings",
]
