"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import IdentityResponse, LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .catalog import FolderResponse, NameRequest, TagResponse
from .common import ErrorResponse, HealthCheckResponse
from .notes import NoteCreate, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "IdentityResponse",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    # Folder and tag schemas
    "NameRequest",
    "FolderResponse",
    "TagResponse",
    # Common schemas
    "ErrorResponse",
    "HealthCheckResponse",
]
