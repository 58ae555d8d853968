"""
Base Mapper

Converts between an entity and its read/write DTO shapes. Mappers hold no
state beyond their collaborators; the only entity-specific business logic
in a CRUD resource lives in apply_to_entity.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, List, TypeVar

T = TypeVar('T')  # entity
S = TypeVar('S')  # read DTO
U = TypeVar('U')  # write DTO


class BaseMapper(ABC, Generic[T, S, U]):
    """
    Abstract mapper for one resource.

    The entity factory is supplied explicitly by whoever builds the mapper
    (normally the concrete service), so new entities are never created by
    inspecting generic type parameters.
    """

    def __init__(self, entity_factory: Callable[[], T]):
        """
        Initialize the mapper.

        Args:
            entity_factory: Zero-argument callable returning a new, unsaved entity
        """
        self.entity_factory = entity_factory

    @abstractmethod
    def to_read_dto(self, entity: T) -> S:
        """
        Convert an entity to its read DTO.

        Must be pure and total over any valid entity.
        """

    @abstractmethod
    def apply_to_entity(self, entity: T, write_dto: U) -> T:
        """
        Merge a write DTO into an entity.

        Args:
            entity: New or persisted entity, mutated in place
            write_dto: Client-supplied fields

        Returns:
            The same entity

        Raises:
            ValidationRejectedError: If the merge violates a resource rule
        """

    def to_entity(self, write_dto: U) -> T:
        """Build a new entity from a write DTO."""
        return self.apply_to_entity(self.entity_factory(), write_dto)

    def to_read_dtos(self, entities: Iterable[T]) -> List[S]:
        return [self.to_read_dto(entity) for entity in entities]
