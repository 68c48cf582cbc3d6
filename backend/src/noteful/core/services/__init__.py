"""
Service layer interfaces and implementations.

Services own the business rules; repositories only talk to the database.
"""

from .interfaces import IAuthService, ICatalogService, IHealthService, INoteService

from .auth_service import AuthService, validate_credential_fields
from .catalog_service import CatalogService, FolderService, TagService
from .health_service import HealthService
from .note_service import NoteService
from .ownership import OwnershipValidator

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ICatalogService",
    "IHealthService",
    # Implementations
    "AuthService",
    "NoteService",
    "CatalogService",
    "FolderService",
    "TagService",
    "HealthService",
    "OwnershipValidator",
    "validate_credential_fields",
]
