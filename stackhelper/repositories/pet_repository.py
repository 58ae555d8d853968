"""
Pet repository for pet-specific data access operations.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from stackhelper.models import Pet
from .base_repository import BaseRepository


class PetRepository(BaseRepository[Pet]):
    """Repository for Pet model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Pet)

    def find_by_name(self, name: str) -> Optional[Pet]:
        """
        Find a pet by its unique name.

        Args:
            name: Exact pet name

        Returns:
            Pet instance or None if not found
        """
        with self._guard("find_by_name"):
            return self.db.scalar(select(Pet).where(Pet.name == name))

    def find_all_by_ids(self, ids: List[int]) -> List[Pet]:
        """
        Load the pets whose keys are in ids, in key order.

        Unknown keys are silently absent from the result.
        """
        if not ids:
            return []
        with self._guard("find_all_by_ids"):
            stmt = select(Pet).where(Pet.id.in_(set(ids))).order_by(Pet.id)
            return list(self.db.scalars(stmt))
