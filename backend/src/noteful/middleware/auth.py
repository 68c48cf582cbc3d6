"""Authentication gate for protected routes."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import TokenError, Unauthorized
from ..core.logging import get_logger
from ..security import Identity, TokenService, get_token_service

logger = get_logger("auth.gate")


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    Every failure, whether a missing header, a wrong scheme, a bad signature
    or an expired token, produces the same 401 so callers cannot tell them
    apart. The precise reason is only logged.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(
        self, request: Request, token_service: TokenService = Depends(get_token_service)
    ) -> Identity:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if credentials is None:
            logger.info(
                "Rejected request without bearer credentials", extra={"path": request.url.path}
            )
            raise Unauthorized()

        try:
            identity = token_service.verify(credentials.credentials)
        except TokenError as e:
            logger.warning(
                "Rejected bearer token",
                extra={"path": request.url.path, "reason": e.reason, "detail": str(e)},
            )
            raise Unauthorized() from e

        request.state.identity = identity
        return identity


jwt_bearer = JWTBearer()


async def get_current_identity(identity: Identity = Depends(jwt_bearer)) -> Identity:
    """Get the identity embedded in the caller's token."""
    return identity


async def get_current_user_id(identity: Identity = Depends(jwt_bearer)) -> UUID:
    """Get current authenticated user ID."""
    return identity.id
