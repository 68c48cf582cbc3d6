"""
Database models for the Noteful application.

Models included:
    - User: account with username/password authentication
    - Note: owned note with optional folder and tags
    - Folder: owned grouping of notes
    - Tag: owned label, linked to notes through ``note_tags``
"""

from .base import BaseModel
from .folder import Folder
from .note import Note
from .tag import Tag, note_tags
from .types import GUID, parse_id
from .user import User

__all__ = [
    "BaseModel",
    "GUID",
    "parse_id",
    "User",
    "Note",
    "Folder",
    "Tag",
    "note_tags",
]
