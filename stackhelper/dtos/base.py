"""
Base DTO shared by read and write shapes.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

K = TypeVar('K')


class BaseDTO(BaseModel, Generic[K]):
    """
    Serializable projection of an entity keyed by K.

    The key is optional: read DTOs always carry it, write DTOs only when
    they target an existing entity (bulk updates).
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: Optional[K] = None
