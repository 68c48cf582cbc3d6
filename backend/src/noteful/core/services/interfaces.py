"""
Service interfaces for Noteful application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from ...security import Identity
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..schemas.catalog import NameRequest
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT."""
        pass

    @abstractmethod
    async def refresh_token(self, identity: Identity) -> TokenResponse:
        """Refresh JWT for an already authenticated identity."""
        pass


class INoteService(ABC):
    """Note service for CRUD operations."""

    @abstractmethod
    async def list_notes(
        self,
        owner_id: UUID,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """List owner notes with optional filters."""
        pass

    @abstractmethod
    async def get_note(self, note_id: Union[str, UUID], owner_id: UUID) -> NoteResponse:
        """Get note by ID."""
        pass

    @abstractmethod
    async def create_note(self, owner_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def update_note(
        self, note_id: Union[str, UUID], owner_id: UUID, request: NoteUpdate
    ) -> NoteResponse:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: Union[str, UUID], owner_id: UUID) -> None:
        """Delete note."""
        pass


class ICatalogService(ABC):
    """Folders and tags: owned, uniquely named entries."""

    @abstractmethod
    async def list_entries(self, owner_id: UUID) -> List[Any]:
        pass

    @abstractmethod
    async def get_entry(self, entry_id: Union[str, UUID], owner_id: UUID) -> Any:
        pass

    @abstractmethod
    async def create_entry(self, owner_id: UUID, request: NameRequest) -> Any:
        pass

    @abstractmethod
    async def rename_entry(
        self, entry_id: Union[str, UUID], owner_id: UUID, request: NameRequest
    ) -> Any:
        pass

    @abstractmethod
    async def delete_entry(self, entry_id: Union[str, UUID], owner_id: UUID) -> None:
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
