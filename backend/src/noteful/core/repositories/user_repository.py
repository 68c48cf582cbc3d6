"""User repository for database operations."""

from typing import Optional

from ..models.user import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    model = User

    async def create_user(self, user_data: dict) -> User:
        """Create new user."""
        return await self.insert(user_data)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        return await self.find_one(username=username)

    async def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        return await self.count(username=username) > 0
