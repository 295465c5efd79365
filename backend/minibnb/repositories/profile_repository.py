# backend/minibnb/repositories/profile_repository.py
"""Profile Repository for the MiniBnB platform."""

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.profile import Profile
from .base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Data access for profiles."""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def search_by_email(self, term: str, limit: int = 5) -> List[Profile]:
        """Profiles whose email contains the term, case-insensitively."""
        try:
            return (
                self.db.query(Profile)
                .filter(Profile.email.ilike(f"%{term}%"))
                .order_by(Profile.email)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error searching profiles: {str(e)}")
            raise RepositoryException(f"Failed to search profiles: {str(e)}")
