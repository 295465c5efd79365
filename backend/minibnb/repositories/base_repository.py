# backend/minibnb/repositories/base_repository.py
"""
Generic repository for the MiniBnB models.

Repositories flush but never commit; the calling service owns the
transaction (see BaseService.transaction). Every SQLAlchemy failure is
logged and surfaces as RepositoryException.
"""

import logging
from typing import Any, Generic, NoReturn, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """Primary-key CRUD for one model class."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def _fail(self, action: str, exc: SQLAlchemyError, rollback: bool = False) -> NoReturn:
        name = self.model.__name__
        self.logger.error(f"Error trying to {action} {name}: {str(exc)}")
        if rollback:
            self.db.rollback()
        if isinstance(exc, IntegrityError):
            raise RepositoryException(f"Integrity constraint violated on {name}: {exc}") from exc
        raise RepositoryException(f"Failed to {action} {name}: {exc}") from exc

    def get_by_id(self, id: Any) -> Optional[T]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            self._fail("load", e)

    def create(self, **kwargs: Any) -> T:
        """Add a new row and flush it so generated ids are populated."""
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except SQLAlchemyError as e:
            self._fail("create", e, rollback=True)

    def update(self, id: Any, **changes: Any) -> Optional[T]:
        """
        Apply the given column values to an existing row.

        Unknown attribute names are ignored. Returns None when no row has
        this primary key.
        """
        try:
            entity = self.db.get(self.model, id)
            if entity is None:
                return None
            for column, value in changes.items():
                if hasattr(entity, column):
                    setattr(entity, column, value)
            self.db.flush()
            return entity
        except SQLAlchemyError as e:
            self._fail("update", e, rollback=True)

    def delete(self, id: Any) -> bool:
        try:
            entity = self.db.get(self.model, id)
            if entity is None:
                return False
            self.db.delete(entity)
            self.db.flush()
            return True
        except SQLAlchemyError as e:
            self._fail("delete", e, rollback=True)
