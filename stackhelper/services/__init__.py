"""
Service layer orchestrating repositories and mappers.
"""

from .crud_service import CrudService
from .interfaces import IDeletableService, IPaginatedService, IReadableService, IWritableService
from .pet_service import PetService

__all__ = [
    "CrudService",
    "PetService",
    "IReadableService",
    "IPaginatedService",
    "IWritableService",
    "IDeletableService",
]
