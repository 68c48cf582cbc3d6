"""Unit tests for the credential store (core/services/auth_service.py)."""

import pytest
from jose import jwt

from src.noteful.core.exceptions import DuplicateUsername, Unauthorized, ValidationError
from src.noteful.core.repositories import UserRepository
from src.noteful.core.schemas.auth import LoginRequest, RegisterRequest
from src.noteful.core.services.auth_service import AuthService, validate_credential_fields
from src.noteful.security import Identity


@pytest.mark.parametrize(
    "fields, location, message",
    [
        ({"password": "longenough1"}, "username", "Missing field"),
        ({"username": "alice"}, "password", "Missing field"),
        ({"username": 42, "password": "longenough1"}, "username", "Incorrect field type: expected string"),
        ({"username": " alice", "password": "longenough1"}, "username", "Cannot start or end with whitespace"),
        ({"username": "alice", "password": "longenough1 "}, "password", "Cannot start or end with whitespace"),
        ({"username": "ab", "password": "longenough1"}, "username", "Must be at least 3 characters long"),
        ({"username": "a" * 21, "password": "longenough1"}, "username", "Must be at most 20 characters long"),
        ({"username": "alice", "password": "short"}, "password", "Must be at least 8 characters long"),
        ({"username": "alice", "password": "p" * 31}, "password", "Must be at most 30 characters long"),
    ],
)
def test_credential_rules(fields, location, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_credential_fields(fields)

    assert exc_info.value.location == location
    assert exc_info.value.message == message
    assert exc_info.value.status_code == 422


def test_missing_is_reported_before_type_errors():
    with pytest.raises(ValidationError) as exc_info:
        validate_credential_fields({"username": 1})

    assert exc_info.value.location == "password"
    assert exc_info.value.message == "Missing field"


def test_boundary_lengths_are_accepted():
    validate_credential_fields({"username": "abc", "password": "p" * 8})
    validate_credential_fields({"username": "a" * 20, "password": "p" * 30})


@pytest.fixture
def auth_service(test_session, token_service):
    return AuthService(test_session, token_service)


async def test_register_stores_digest_not_plaintext(auth_service, test_session):
    created = await auth_service.register_user(
        RegisterRequest(username="newuser", password="longenough1", full_name="  New User ")
    )

    assert created.username == "newuser"
    assert created.full_name == "New User"
    assert not hasattr(created, "password_hash")

    stored = await UserRepository(test_session).get_by_username("newuser")
    assert stored.password_hash != "longenough1"
    assert auth_service.verify_credentials(stored, "longenough1") is True
    assert auth_service.verify_credentials(stored, "longenough1x") is False


async def test_register_duplicate_username_keeps_original(auth_service, test_session):
    await auth_service.register_user(RegisterRequest(username="taken", password="firstpass1"))

    with pytest.raises(DuplicateUsername) as exc_info:
        await auth_service.register_user(RegisterRequest(username="taken", password="secondpass2"))

    assert exc_info.value.location == "username"
    assert exc_info.value.status_code == 422
    original = await UserRepository(test_session).get_by_username("taken")
    assert auth_service.verify_credentials(original, "firstpass1") is True


async def test_register_validates_before_writing(auth_service, test_session):
    with pytest.raises(ValidationError) as exc_info:
        await auth_service.register_user(RegisterRequest(username="ab", password="longenough1"))

    assert exc_info.value.message == "Must be at least 3 characters long"
    assert await UserRepository(test_session).count() == 0


async def test_login_returns_token_for_username(auth_service, test_user, token_service):
    response = await auth_service.authenticate_user(
        LoginRequest(username="alice", password="Password123")
    )

    claims = jwt.get_unverified_claims(response.access_token)
    assert claims["sub"] == "alice"
    assert response.user.id == test_user.id
    assert response.expires_in == 3600
    assert token_service.verify(response.access_token).id == test_user.id


@pytest.mark.parametrize("username, password", [("alice", "wrongpass1"), ("nobody", "Password123")])
async def test_login_failures_are_indistinguishable(auth_service, test_user, username, password):
    with pytest.raises(Unauthorized) as exc_info:
        await auth_service.authenticate_user(LoginRequest(username=username, password=password))

    assert exc_info.value.to_dict() == {"code": 401, "reason": "Unauthorized", "message": "Unauthorized"}


async def test_refresh_token_keeps_identity(auth_service, test_user):
    identity = Identity(id=test_user.id, username=test_user.username, full_name=test_user.full_name)

    response = await auth_service.refresh_token(identity)

    assert jwt.get_unverified_claims(response.access_token)["sub"] == "alice"
    assert response.user.username == "alice"
