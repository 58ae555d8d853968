"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the database models.
DTOs prevent leaking database structure to external APIs and allow independent evolution.

Structure:
- base: key-carrying base class for read and write shapes
- request/: DTOs parsed from incoming query strings
- response/: generic response envelopes (pages)
- pet_dto: the example Pet resource shapes
"""

from .base import BaseDTO
from .pet_dto import PetDTO, PetWriteDTO
from .request import SearchCriterion
from .response import OrderResponse, Page

__all__ = ["BaseDTO", "PetDTO", "PetWriteDTO", "SearchCriterion", "OrderResponse", "Page"]
