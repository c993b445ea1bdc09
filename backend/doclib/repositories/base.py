"""Base repository with shared get-by-ID patterns.

Eliminates duplicated __init__, get_by_id, and get_by_id_optional logic
across repositories.  Subclasses specify model_class and not_found_error;
the base provides the common implementations.
"""

from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import LibraryException

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Document)
        not_found_error: Exception class to raise from get_by_id
    """

    model_class: Type[ModelT]
    not_found_error: Type[LibraryException]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        """Base query for lookups, ordered by id (insertion order)."""
        return self.db.query(self.model_class).order_by(self.model_class.id)

    def get_by_id(self, entity_id: int) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_by_id_optional(self, entity_id: int) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        return self.db.get(self.model_class, entity_id)

    def get_all(self) -> list[ModelT]:
        return self._base_query().all()

    def count(self) -> int:
        return self.db.query(self.model_class).count()
