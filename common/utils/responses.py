"""
Standard API response helpers.

Every endpoint answers with the same envelope:

    {"success": bool, "data"?: any, "message"?: str, "pagination"?: {...}}

Example:
    from common.utils import success_response, error_response

    @app.get("/projects/{id}")
    async def get_project(id: str):
        return success_response(project, message="Project retrieved")
"""

import math
from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    errors: Optional[list] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "PROJECT_NOT_FOUND")
        errors: List of individual validation messages

    Returns:
        Dictionary with success=False and the message at top level
    """
    response: Dict[str, Any] = {"success": False, "message": message}

    if code:
        response["code"] = code

    if errors:
        response["errors"] = errors

    return response


def build_pagination(total: int, page: int, limit: int) -> Dict[str, Any]:
    """
    Pagination metadata for skip/limit listings.

    totalPages is ceil(total / limit).
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalCount": total,
        "hasNext": page * limit < total,
        "hasPrev": page > 1,
    }


def paginated_response(
    items: list,
    pagination: Dict[str, Any],
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a paginated success response.

    Args:
        items: List of items for current page
        pagination: Metadata from build_pagination()
        message: Optional success message
    """
    response: Dict[str, Any] = {
        "success": True,
        "data": items,
        "pagination": pagination,
    }

    if message:
        response["message"] = message

    return response
