"""Request middleware."""

from portfolio.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
