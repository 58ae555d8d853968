"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations, plus the paging,
sorting and specification helpers they accept.
"""

from .base_repository import BaseRepository
from .field_specifications import FieldSpecification, build_specification
from .paging import Order, PageRequest, Sort
from .pet_repository import PetRepository
from .specifications import Specification

__all__ = [
    "BaseRepository",
    "PetRepository",
    "Specification",
    "FieldSpecification",
    "build_specification",
    "Order",
    "PageRequest",
    "Sort",
]
