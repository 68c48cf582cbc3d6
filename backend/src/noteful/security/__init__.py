"""Security utilities."""

from .jwt import Identity, IssuedToken, TokenConfig, TokenService, get_token_service
from .password import dummy_verify, hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "dummy_verify",
    "Identity",
    "IssuedToken",
    "TokenConfig",
    "TokenService",
    "get_token_service",
]
