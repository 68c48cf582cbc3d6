"""Repository layer for data access."""

from .base import BaseRepository
from .folder_repository import FolderRepository
from .note_repository import NoteRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "NoteRepository",
    "FolderRepository",
    "TagRepository",
]
