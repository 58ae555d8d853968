"""
Dependency injection providers for FastAPI.

Services are built per request around the request's database session,
following the Dependency Inversion Principle. Tests override get_db to
point every service at a test database.
"""

from typing import Callable, Type

from fastapi import Depends
from sqlalchemy.orm import Session

from stackhelper.database import get_db
from stackhelper.services.crud_service import CrudService
from stackhelper.services.pet_service import PetService


def service_dependency(service_class: Type[CrudService]) -> Callable[..., CrudService]:
    """
    Build a FastAPI dependency that instantiates service_class per request.

    Args:
        service_class: CrudService subclass whose constructor takes a Session

    Returns:
        Dependency callable suitable for Depends()
    """
    def provider(db: Session = Depends(get_db)) -> CrudService:
        return service_class(db)

    provider.__name__ = f"get_{service_class.__name__}"
    return provider


get_pet_service = service_dependency(PetService)
