"""Middleware for authentication and other cross-cutting concerns."""

from .auth import JWTBearer, get_current_identity, get_current_user_id, jwt_bearer

__all__ = ["JWTBearer", "jwt_bearer", "get_current_identity", "get_current_user_id"]
