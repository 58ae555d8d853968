"""
Pet DTOs

Read shape nests friends as full DTOs; write shape references them by key.
"""

from typing import List

from pydantic import Field, field_validator

from .base import BaseDTO


class PetDTO(BaseDTO[int]):
    """Response DTO for a pet."""

    name: str = Field(description="Pet name")
    friends: List["PetDTO"] = Field(default_factory=list, description="Friends of this pet")


class PetWriteDTO(BaseDTO[int]):
    """
    Request DTO for creating or updating a pet.

    Accepts both friends_ids and the camelCase wire name friendsIds.
    """

    name: str = Field(min_length=1, max_length=255, description="Unique pet name")
    friends_ids: List[int] = Field(default_factory=list, alias="friendsIds", description="Keys of existing pets")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


PetDTO.model_rebuild()
