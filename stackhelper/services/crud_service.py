"""
CRUD Service

Generic orchestration of a repository and a mapper for one resource.

Transaction discipline:
- every read runs in a read-only unit of work (no flush allowed, rolled back)
- every write is atomic per call; in batch writes, items the mapper
  rejects are skipped and logged while the accepted ones are still committed
"""

from typing import Generic, List, Optional, TypeVar
import logging

from sqlalchemy.orm import Session

from stackhelper.config import settings
from stackhelper.database import transaction
from stackhelper.dtos.request.search_request import SearchCriterion
from stackhelper.dtos.response.page_response import Page
from stackhelper.exceptions import InvalidQueryError, ValidationRejectedError
from stackhelper.constants import Paging
from stackhelper.mappers.base_mapper import BaseMapper
from stackhelper.repositories.base_repository import BaseRepository
from stackhelper.repositories.field_specifications import build_specification
from stackhelper.repositories.paging import PageRequest, Sort
from stackhelper.utils.logging_utils import log_operation
from .interfaces import (
    IDeletableService,
    IPaginatedService,
    IReadableService,
    IWritableService,
    SortParam,
)

T = TypeVar('T')  # entity
K = TypeVar('K')  # key
S = TypeVar('S')  # read DTO
U = TypeVar('U')  # write DTO

logger = logging.getLogger(__name__)


class CrudService(
    IReadableService[K, S],
    IPaginatedService[S],
    IWritableService[K, U],
    IDeletableService[K],
    Generic[T, K, S, U],
):
    """
    Service implementing every CRUD capability for one resource.

    Concrete services only pick the repository and build the mapper with
    the entity factory; see PetService.
    """

    resource_name = "resource"

    def __init__(
        self,
        db: Session,
        repository: BaseRepository[T],
        mapper: BaseMapper[T, S, U],
        max_page_size: Optional[int] = None
    ):
        """
        Initialize the service.

        Args:
            db: Database session owning the unit of work
            repository: Data access for the entity
            mapper: Converter between the entity and its DTOs
            max_page_size: Upper bound for find_page sizes (settings default)
        """
        self.db = db
        self.repository = repository
        self.mapper = mapper
        self.max_page_size = max_page_size or settings.max_page_size

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def count_all(self) -> int:
        with transaction(self.db, read_only=True):
            return self.repository.count()

    def find_all(self, sort: SortParam = None) -> List[S]:
        parsed = Sort.parse(sort)
        with transaction(self.db, read_only=True):
            return self.mapper.to_read_dtos(self.repository.find_all(parsed))

    def find_page(
        self,
        page: int,
        size: int,
        sort: SortParam = None,
        criteria: Optional[List[SearchCriterion]] = None
    ) -> Page[S]:
        if size > self.max_page_size:
            raise InvalidQueryError(
                f"Page size must be <= {self.max_page_size}, got {size}",
                parameter=Paging.SIZE_PARAM
            )
        request = PageRequest.of(page, size, sort)
        specification = build_specification(self.repository.model, criteria)
        with transaction(self.db, read_only=True):
            items, total = self.repository.find_page(request, specification)
            return Page.of(self.mapper.to_read_dtos(items), request, total)

    def find_by_id(self, key: K) -> Optional[S]:
        with transaction(self.db, read_only=True):
            entity = self.repository.find_by_id(key)
            if entity is None:
                logger.info(f"find_by_id({key}): {self.resource_name} not found")
                return None
            return self.mapper.to_read_dto(entity)

    def exists_by_id(self, key: K) -> bool:
        with transaction(self.db, read_only=True):
            return self.repository.exists_by_id(key)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @log_operation("create")
    def create(self, dto: U) -> Optional[K]:
        try:
            with transaction(self.db):
                entity = self.repository.save(self.mapper.to_entity(dto))
                return entity.id
        except ValidationRejectedError as e:
            logger.warning(f"create(): {self.resource_name} rejected: {e.message}")
            return None

    @log_operation("create_all")
    def create_all(self, dtos: List[U]) -> List[K]:
        with transaction(self.db):
            accepted = []
            for index, dto in enumerate(dtos):
                try:
                    entity = self.mapper.to_entity(dto)
                except ValidationRejectedError as e:
                    logger.warning(f"create_all(): skipping item {index}: {e.message}")
                    continue
                # Staged so later items in the batch see it (autoflush)
                accepted.append(self.repository.add(entity))
            saved = self.repository.save_all(accepted)
            keys = [entity.id for entity in saved]
        if len(keys) < len(dtos):
            logger.info(f"create_all(): created {len(keys)} of {len(dtos)} {self.resource_name} items")
        return keys

    @log_operation("update")
    def update(self, key: K, dto: U) -> Optional[K]:
        try:
            with transaction(self.db):
                entity = self.repository.find_by_id(key)
                if entity is None:
                    logger.info(f"update({key}): {self.resource_name} not found")
                    return None
                self.mapper.apply_to_entity(entity, dto)
                return self.repository.save(entity).id
        except ValidationRejectedError as e:
            logger.warning(f"update({key}): {self.resource_name} rejected: {e.message}")
            return None

    @log_operation("update_all")
    def update_all(self, dtos: List[U]) -> List[K]:
        with transaction(self.db):
            updated = []
            for index, dto in enumerate(dtos):
                if dto.id is None:
                    logger.warning(f"update_all(): skipping item {index}: no key")
                    continue
                entity = self.repository.find_by_id(dto.id)
                if entity is None:
                    logger.warning(f"update_all({dto.id}): {self.resource_name} not found")
                    continue
                try:
                    self.mapper.apply_to_entity(entity, dto)
                except ValidationRejectedError as e:
                    # Discard any unflushed change the mapper made before rejecting
                    self.db.expire(entity)
                    logger.warning(f"update_all({dto.id}): skipped: {e.message}")
                    continue
                updated.append(entity)
            saved = self.repository.save_all(updated)
            keys = [entity.id for entity in saved]
        return keys

    @log_operation("delete_by_id")
    def delete_by_id(self, key: K) -> None:
        with transaction(self.db):
            if not self.repository.delete_by_id(key):
                logger.info(f"delete_by_id({key}): {self.resource_name} already absent")

    @log_operation("delete_by_id_list")
    def delete_by_id_list(self, keys: List[K]) -> None:
        with transaction(self.db):
            for key in keys:
                if not self.repository.delete_by_id(key):
                    logger.info(f"delete_by_id_list(): {self.resource_name} {key} already absent")

    @log_operation("delete_all")
    def delete_all(self) -> int:
        with transaction(self.db):
            deleted = self.repository.delete_all()
        logger.info(f"delete_all(): removed {deleted} {self.resource_name} items")
        return deleted
