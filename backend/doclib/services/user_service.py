"""Contributor registry.

Users are only ever created to attribute contributions, normally through
get_or_create.  Email is the identity key: the first contribution from an
address decides the stored display name, later ones never rename it.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..exceptions import ConflictError
from ..models import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def list_users(self) -> List[User]:
        return self.user_repo.get_all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.user_repo.get_by_id_optional(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.user_repo.get_by_email(email)

    def create_user(self, name: str, email: str, commit: bool = True) -> User:
        """Create a user. Raises ConflictError if the email is taken."""
        if self.user_repo.get_by_email(email) is not None:
            raise ConflictError("email", email)
        user = self.user_repo.create(name, email)
        if commit:
            self.db.commit()
        logger.info("User created", extra={"user_id": user.id})
        return user

    def get_or_create(self, name: str, email: str) -> Tuple[User, bool]:
        """Return (user, created). Does not commit."""
        existing = self.user_repo.get_by_email(email)
        if existing is not None:
            return existing, False
        return self.create_user(name, email, commit=False), True
