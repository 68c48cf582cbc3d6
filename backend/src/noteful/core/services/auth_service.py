"""Authentication service implementation."""

from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...security import (
    Identity,
    IssuedToken,
    TokenService,
    dummy_verify,
    hash_password,
    verify_password,
)
from ..exceptions import DuplicateUsername, Unauthorized, ValidationError
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    IdentityResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from .interfaces import IAuthService

logger = get_logger("auth")

# (min, max) accepted lengths, inclusive
CREDENTIAL_LENGTHS = {
    "username": (3, 20),
    "password": (8, 30),
}


def validate_credential_fields(fields: Dict[str, Any]) -> None:
    """Check username and password before anything is hashed or stored.

    Rules are applied field by field in a fixed order: presence, type,
    surrounding whitespace, then length.
    """
    for name in CREDENTIAL_LENGTHS:
        if fields.get(name) is None:
            raise ValidationError(name, "Missing field")

    for name in CREDENTIAL_LENGTHS:
        if not isinstance(fields[name], str):
            raise ValidationError(name, "Incorrect field type: expected string")

    for name in CREDENTIAL_LENGTHS:
        if fields[name] != fields[name].strip():
            raise ValidationError(name, "Cannot start or end with whitespace")

    for name, (min_len, max_len) in CREDENTIAL_LENGTHS.items():
        if len(fields[name]) < min_len:
            raise ValidationError(name, f"Must be at least {min_len} characters long")
        if len(fields[name]) > max_len:
            raise ValidationError(name, f"Must be at most {max_len} characters long")


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, username=user.username, full_name=user.full_name or "")


class AuthService(IAuthService):
    """Credential store and token issuance on top of the user repository."""

    def __init__(self, session: AsyncSession, token_service: TokenService):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_service = token_service

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        validate_credential_fields(request.model_dump())

        if await self.user_repo.is_username_taken(request.username):
            raise DuplicateUsername()

        user_data = {
            "username": request.username,
            "password_hash": hash_password(request.password),
            "full_name": (request.full_name or "").strip(),
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            await self.session.rollback()
            raise DuplicateUsername()

        logger.info("Registered user", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user)

    def verify_credentials(self, user: User, candidate_password: str) -> bool:
        """Compare a candidate password with the stored digest."""
        return verify_password(candidate_password, user.password_hash)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a bearer token."""
        user = await self.user_repo.get_by_username(request.username)
        if user is None:
            dummy_verify()
            logger.info("Login rejected", extra={"reason": "unknown_username"})
            raise Unauthorized()

        if not self.verify_credentials(user, request.password):
            logger.info("Login rejected", extra={"reason": "bad_password"})
            raise Unauthorized()

        return self._token_response(self.token_service.issue(identity_of(user)), identity_of(user))

    async def refresh_token(self, identity: Identity) -> TokenResponse:
        """Re-issue a token for an identity proven by a still-valid token."""
        return self._token_response(self.token_service.refresh(identity), identity)

    def _token_response(self, issued: IssuedToken, identity: Identity) -> TokenResponse:
        return TokenResponse(
            access_token=issued.token,
            token_type="bearer",
            expires_in=issued.expires_in,
            user=IdentityResponse(
                id=identity.id, username=identity.username, full_name=identity.full_name
            ),
        )
