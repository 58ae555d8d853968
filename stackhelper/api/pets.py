"""
Pet endpoints.

All CRUD endpoints come from the generic router; add pet-only endpoints here.
"""

from stackhelper.dependencies import get_pet_service
from stackhelper.dtos.pet_dto import PetDTO, PetWriteDTO
from .crud_router import build_crud_router

router = build_crud_router(
    get_pet_service,
    read_dto=PetDTO,
    write_dto=PetWriteDTO,
    prefix="/pets",
    resource_name="pets",
    tags=["pets"],
)
