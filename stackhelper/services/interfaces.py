"""
Service Interfaces

Capability sets a CRUD service can offer, following the Interface
Segregation Principle. A resource composes only the capabilities it needs;
CrudService implements all four.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, TypeVar, Union

from stackhelper.dtos.request.search_request import SearchCriterion
from stackhelper.dtos.response.page_response import Page

K = TypeVar('K')  # key
S = TypeVar('S')  # read DTO
U = TypeVar('U')  # write DTO

SortParam = Union[None, str, Sequence[str]]


class IReadableService(ABC, Generic[K, S]):
    """Read access to a resource."""

    @abstractmethod
    def count_all(self) -> int:
        """Total number of persisted entities."""

    @abstractmethod
    def find_all(self, sort: SortParam = None) -> List[S]:
        """
        All entities as read DTOs.

        Args:
            sort: Field names, '-' prefix for descending; natural order if unset
        """

    @abstractmethod
    def find_by_id(self, key: K) -> Optional[S]:
        """
        One entity as a read DTO.

        Returns:
            Read DTO, or None when no entity has that key
        """

    @abstractmethod
    def exists_by_id(self, key: K) -> bool:
        """Whether an entity with that key exists."""


class IPaginatedService(ABC, Generic[S]):
    """Paged, sorted and filtered listing."""

    @abstractmethod
    def find_page(
        self,
        page: int,
        size: int,
        sort: SortParam = None,
        criteria: Optional[List[SearchCriterion]] = None
    ) -> Page[S]:
        """
        One page of read DTOs.

        Raises:
            InvalidQueryError: If page < 0, size is out of bounds, or a sort
                or search field is unknown
        """


class IWritableService(ABC, Generic[K, U]):
    """Creation and update of a resource."""

    @abstractmethod
    def create(self, dto: U) -> Optional[K]:
        """
        Create one entity.

        Returns:
            The assigned key, or None if the mapper rejected the DTO

        Raises:
            PersistenceError: If the store rejects the write
        """

    @abstractmethod
    def create_all(self, dtos: List[U]) -> List[K]:
        """Create several entities, skipping the ones the mapper rejects."""

    @abstractmethod
    def update(self, key: K, dto: U) -> Optional[K]:
        """
        Update one entity.

        Returns:
            The key, or None if it does not exist or the mapper rejected the DTO
        """

    @abstractmethod
    def update_all(self, dtos: List[U]) -> List[K]:
        """Update the entities named by each DTO's key, skipping unknown ones."""


class IDeletableService(ABC, Generic[K]):
    """Deletion of a resource. Deleting an absent key is not an error."""

    @abstractmethod
    def delete_by_id(self, key: K) -> None:
        """Delete the entity with that key, if any."""

    @abstractmethod
    def delete_by_id_list(self, keys: List[K]) -> None:
        """Delete every entity whose key is listed, ignoring absent ones."""

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every entity and return how many were removed."""
