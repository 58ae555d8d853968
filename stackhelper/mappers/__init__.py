"""
Mapper layer converting entities to and from DTOs.
"""

from .base_mapper import BaseMapper
from .pet_mapper import PetMapper

__all__ = ["BaseMapper", "PetMapper"]
