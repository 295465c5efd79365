# backend/minibnb/services/profile_service.py
"""Profile Service for the MiniBnB platform."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ValidationException
from ..models.profile import Profile
from ..repositories import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from ..schemas.profile import ProfileUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class ProfileService(BaseService):
    def __init__(self, db: Session, repository: Optional[ProfileRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_profile_repository(db)

    @BaseService.measure_operation("get_profile")
    def get_profile(self, profile_id: str) -> Profile:
        profile = self.repository.get_by_id(profile_id)
        if not profile:
            raise NotFoundException("Profile not found")
        return profile

    @BaseService.measure_operation("update_profile")
    def update_profile(self, profile_id: str, update_data: ProfileUpdate) -> Profile:
        """Apply the provided fields only; omitted fields are left untouched."""
        profile = self.get_profile(profile_id)
        with self.transaction():
            changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
            updated = self.repository.update(profile.id, **changes)
        return updated or profile

    @BaseService.measure_operation("search_profiles")
    def search_by_email(self, term: str, limit: int = 5) -> List[Profile]:
        """Up to `limit` profiles whose email contains the term, used to pick co-hosts."""
        term = term.strip()
        if not term:
            raise ValidationException("Email query parameter is required")
        return self.repository.search_by_email(term, limit=limit)
