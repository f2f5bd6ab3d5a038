"""
Authentication middleware for protected routes.

Verifies the JWT sent by the client and attaches its claims to the request.
"""

import logging
from typing import Optional

from fastapi import Request

from common.auth import AuthProvider
from common.utils.exceptions import UnauthorizedException, ForbiddenException

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """
    Middleware that verifies tokens and gates admin-only routes.
    """

    def __init__(
        self,
        auth_provider: AuthProvider,
        cookie_name: str = "token",
        admin_role: str = "admin",
    ):
        """
        Initialize AuthMiddleware.

        Args:
            auth_provider: Token verifier
            cookie_name: Cookie checked when no Authorization header is sent
            admin_role: Role claim required by require_admin
        """
        self._auth_provider = auth_provider
        self._cookie_name = cookie_name
        self._admin_role = admin_role

    async def require_auth(self, request: Request) -> dict:
        """
        Validate request is authenticated.

        Args:
            request: HTTP request object

        Returns:
            Verified token claims

        Raises:
            UnauthorizedException: No token, or token invalid or expired

        Side Effects:
            - Attaches claims to request.state.user
        """
        token = self._extract_token(request)

        if not token:
            raise UnauthorizedException(
                message="Not authorized. Please log in",
                code="AUTH_REQUIRED"
            )

        try:
            claims = await self._auth_provider.verify_token(token)
        except ValueError as e:
            logger.debug(f"Token rejected: {e}")
            raise UnauthorizedException(
                message="Invalid or expired token",
                code="INVALID_TOKEN"
            )

        request.state.user = claims
        return claims

    def require_admin(self, user: dict) -> dict:
        """
        Check the verified claims carry the admin role.

        Raises:
            ForbiddenException: Role claim missing or different
        """
        if user.get("role") != self._admin_role:
            raise ForbiddenException(
                message="Access denied. Admin only",
                code="ADMIN_REQUIRED"
            )
        return user

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract the token from the Authorization header or the auth cookie.

        Expected header format: "Authorization: Bearer <token>"
        """
        auth_header = request.headers.get("Authorization")

        if auth_header:
            parts = auth_header.split()
            if len(parts) == 2 and parts[0].lower() == "bearer":
                return parts[1]

        return request.cookies.get(self._cookie_name) or None
