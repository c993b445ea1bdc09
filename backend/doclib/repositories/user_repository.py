"""Repository for contributor database operations."""

from datetime import datetime, timezone
from typing import Optional

from ..models import User
from ..exceptions import UserNotFoundError
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access layer for users.

    Lookups by email are exact, case-sensitive string matches.
    """

    model_class = User
    not_found_error = UserNotFoundError

    def get_by_email(self, email: str) -> Optional[User]:
        return self._base_query().filter(User.email == email).first()

    def create(self, name: str, email: str) -> User:
        """Insert a user stamped with the current time."""
        user = User(name=name, email=email, created_at=datetime.now(timezone.utc))
        self.db.add(user)
        self.db.flush()
        self.db.refresh(user)
        return user
