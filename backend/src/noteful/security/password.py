"""Password hashing utilities."""

from passlib.context import CryptContext

from ..config import get_settings

# bcrypt_sha256 pre-hashes with SHA-256, so multi-byte passwords are never
# truncated at bcrypt's 72-byte limit. The work factor is fixed per process.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__default_rounds=get_settings().password_hash_rounds,
)


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Mismatches return False."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unrecognised or corrupt stored digest
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verify when the account does not exist."""
    pwd_context.dummy_verify()
