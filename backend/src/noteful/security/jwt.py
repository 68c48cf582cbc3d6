"""JWT bearer token issuance and verification.

Tokens are stateless: nothing is stored server side, so a valid signature
and an unexpired ``exp`` are the only proof of authenticity. The claims are::

    {"sub": <username>, "user": <identity snapshot>, "iat": <int>, "exp": <int>}

Times are whole seconds since the epoch. A token issued at ``T`` with a TTL
of ``D`` seconds verifies for any check time in ``[T, T + D)``.
"""

import time
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Callable, Dict
from uuid import UUID

from jose import JWTError, jwt

from ..config import Settings, get_settings
from ..core.exceptions import InvalidSignature, MalformedToken, TokenExpired


@dataclass(frozen=True)
class TokenConfig:
    """Signing secret, algorithm and lifetime. Built once, never mutated."""

    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            ttl=timedelta(minutes=settings.access_token_expire_minutes),
        )

    @property
    def ttl_seconds(self) -> int:
        return int(self.ttl.total_seconds())


@dataclass(frozen=True)
class Identity:
    """Account snapshot carried in the ``user`` claim. Never holds the digest."""

    id: UUID
    username: str
    full_name: str = ""

    def to_claim(self) -> Dict[str, Any]:
        return {"id": str(self.id), "username": self.username, "full_name": self.full_name}

    @classmethod
    def from_claim(cls, claim: Any) -> "Identity":
        if not isinstance(claim, dict):
            raise MalformedToken("user claim is not an object")
        try:
            return cls(
                id=UUID(str(claim["id"])),
                username=str(claim["username"]),
                full_name=str(claim.get("full_name") or ""),
            )
        except (KeyError, ValueError) as e:
            raise MalformedToken(f"user claim is incomplete: {e}") from e


@dataclass(frozen=True)
class IssuedToken:
    token: str
    subject: str
    issued_at: int
    expires_at: int

    @property
    def expires_in(self) -> int:
        return self.expires_at - self.issued_at


class TokenService:
    """Issues, refreshes and verifies signed bearer tokens."""

    def __init__(self, config: TokenConfig, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock

    def issue(self, identity: Identity) -> IssuedToken:
        issued_at = int(self._clock())
        expires_at = issued_at + self.config.ttl_seconds
        claims = {
            "sub": identity.username,
            "user": identity.to_claim(),
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self.config.secret_key, algorithm=self.config.algorithm)
        return IssuedToken(
            token=token, subject=identity.username, issued_at=issued_at, expires_at=expires_at
        )

    def refresh(self, identity: Identity) -> IssuedToken:
        """Re-issue for an identity already proven by a valid token."""
        return self.issue(identity)

    def verify(self, raw_token: str) -> Identity:
        """Return the embedded identity or raise a ``TokenError`` subclass."""
        if not raw_token or not isinstance(raw_token, str):
            raise MalformedToken("empty token")

        try:
            jwt.get_unverified_claims(raw_token)
        except JWTError as e:
            raise MalformedToken(str(e)) from e

        try:
            # expiry is checked below against the injected clock
            payload = jwt.decode(
                raw_token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidSignature(str(e)) from e

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise MalformedToken("missing exp claim")
        if not self._clock() < expires_at:
            raise TokenExpired(f"expired at {expires_at}")

        identity = Identity.from_claim(payload.get("user"))
        if payload.get("sub") != identity.username:
            raise MalformedToken("subject does not match user claim")
        return identity


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built from settings on first use."""
    return TokenService(TokenConfig.from_settings(get_settings()))
