"""
Pet Mapper

Pet names are unique, and friends may only reference pets that already
exist. Unknown friend keys are dropped rather than rejected.

Read DTOs nest friends depth-first. A pet is expanded only the first time
it is reached; any later occurrence in the same rendering (a cycle or a
shared friend) carries no friends, so the output grows with the number of
friendship links rather than the number of paths.
"""

import logging
from typing import Callable, Set

from stackhelper.dtos.pet_dto import PetDTO, PetWriteDTO
from stackhelper.exceptions import ValidationRejectedError
from stackhelper.models import Pet
from stackhelper.repositories.pet_repository import PetRepository
from .base_mapper import BaseMapper

logger = logging.getLogger(__name__)


class PetMapper(BaseMapper[Pet, PetDTO, PetWriteDTO]):
    """Mapper between Pet, PetDTO and PetWriteDTO."""

    def __init__(self, repository: PetRepository, entity_factory: Callable[[], Pet] = Pet):
        super().__init__(entity_factory)
        self.repository = repository

    def to_read_dto(self, entity: Pet) -> PetDTO:
        return self._to_read_dto(entity, set())

    def _to_read_dto(self, entity: Pet, visited: Set[int]) -> PetDTO:
        # Each pet is expanded once per rendering; later sightings are leaves
        if entity.id in visited:
            return PetDTO(id=entity.id, name=entity.name, friends=[])
        visited.add(entity.id)
        return PetDTO(
            id=entity.id,
            name=entity.name,
            friends=[self._to_read_dto(friend, visited) for friend in entity.friends],
        )

    def apply_to_entity(self, entity: Pet, write_dto: PetWriteDTO) -> Pet:
        existing = self.repository.find_by_name(write_dto.name)
        if existing is not None and existing is not entity:
            raise ValidationRejectedError(
                f"A pet named '{write_dto.name}' already exists",
                invalid_fields={"name": write_dto.name}
            )

        friends = self.repository.find_all_by_ids(write_dto.friends_ids)
        missing = set(write_dto.friends_ids) - {friend.id for friend in friends}
        if missing:
            logger.warning(f"Ignoring unknown friend ids {sorted(missing)} for pet '{write_dto.name}'")
        if entity.id is not None:
            friends = [friend for friend in friends if friend.id != entity.id]

        entity.name = write_dto.name
        entity.friends = friends
        return entity
