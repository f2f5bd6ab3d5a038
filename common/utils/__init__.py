"""
Utilities module - Common helpers for API responses and exceptions.
"""

from common.utils.responses import (
    success_response,
    error_response,
    build_pagination,
    paginated_response,
)
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ServerException,
    InternalServerException,
)

__all__ = [
    "success_response",
    "error_response",
    "build_pagination",
    "paginated_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ServerException",
    "InternalServerException",
]
