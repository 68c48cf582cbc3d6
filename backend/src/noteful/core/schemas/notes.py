"""
Note management schemas.

Identifiers in request bodies are accepted as any JSON value: a malformed
``folder_id``, a non-array ``tags`` or a bad tag id is an invalid reference
reported by the ownership validator, rather than a schema error.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .catalog import TagResponse


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: Optional[str] = Field(default=None, description="Note title (required)")
    content: Optional[str] = Field(default=None, description="Note content")
    folder_id: Optional[Any] = Field(
        default=None, description="Folder id; empty string means no folder"
    )
    tags: Optional[Any] = Field(default=None, description="Array of tag ids")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Meeting Notes - Q4 Planning",
                "content": "Review Q3 performance, set Q4 objectives",
                "folder_id": "5f0c1e2a-8a61-4b3a-9c1e-0d7f1f1a2b3c",
                "tags": ["0b8e9a2c-51f4-4c39-9a4e-7d2f6c1b0e5a"],
            }
        }
    )


class NoteUpdate(BaseModel):
    """Partial note update.

    Only fields present in the request body are applied; use
    ``model_fields_set`` to tell an omitted field from one explicitly set
    to null or empty. ``folder_id`` of ``""`` or null removes the folder.
    """

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    folder_id: Optional[Any] = Field(default=None, description="Folder id, empty to unset")
    tags: Optional[Any] = Field(default=None, description="Replacement array of tag ids")

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Updated title", "folder_id": ""}}
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    folder_id: Optional[uuid.UUID] = Field(default=None, description="Folder id, if filed")
    tags: List[TagResponse] = Field(default_factory=list, description="Note tags")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
