"""
Pet Service

CRUD service for the example Pet resource.
"""

from sqlalchemy.orm import Session

from stackhelper.dtos.pet_dto import PetDTO, PetWriteDTO
from stackhelper.mappers.pet_mapper import PetMapper
from stackhelper.models import Pet
from stackhelper.repositories.pet_repository import PetRepository
from .crud_service import CrudService


class PetService(CrudService[Pet, int, PetDTO, PetWriteDTO]):
    """Service for pet business logic."""

    resource_name = "pet"

    def __init__(self, db: Session):
        repository = PetRepository(db)
        super().__init__(db, repository, PetMapper(repository, entity_factory=Pet))
