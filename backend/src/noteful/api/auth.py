"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import LoginRequest, TokenResponse
from ..core.schemas.common import ErrorResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_current_identity
from ..security import Identity, TokenService, get_token_service

router = APIRouter(tags=["authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange username and password for a bearer token."""
    auth_service = AuthService(session, token_service)
    return await auth_service.authenticate_user(request)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
async def refresh_token(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Trade a still-valid token for a fresh one with a new expiry."""
    auth_service = AuthService(session, token_service)
    return await auth_service.refresh_token(identity)
