"""
Base repository providing common CRUD operations.
"""

from contextlib import contextmanager
from typing import Any, Generic, Iterable, List, Optional, Tuple, Type, TypeVar
import logging

from sqlalchemy import func, select, delete as sa_delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stackhelper.exceptions import PersistenceError
from .paging import PageRequest, Sort
from .specifications import Specification

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Writes only flush; committing is the caller's unit of work. Every
    SQLAlchemy failure surfaces as PersistenceError.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"{self.model.__name__}.{operation} failed: {e}")
            raise PersistenceError(operation, str(e)) from e

    def find_all(self, sort: Optional[Sort] = None) -> List[T]:
        """
        Retrieve all records.

        Args:
            sort: Optional ordering; natural key order otherwise

        Returns:
            List of model instances
        """
        with self._guard("find_all"):
            stmt = select(self.model).order_by(*(sort or Sort.unsorted()).to_sql(self.model))
            return list(self.db.scalars(stmt))

    def find_by_id(self, id: Any) -> Optional[T]:
        """
        Retrieve a record by its primary key.

        Returns:
            Model instance or None if not found
        """
        with self._guard("find_by_id"):
            return self.db.get(self.model, id)

    def exists_by_id(self, id: Any) -> bool:
        with self._guard("exists_by_id"):
            stmt = select(func.count()).select_from(self.model).where(self.model.id == id)
            return self.db.scalar(stmt) > 0

    def count(self, specification: Optional[Specification] = None) -> int:
        """
        Count records, optionally restricted by a specification.

        Returns:
            Number of matching records
        """
        with self._guard("count"):
            stmt = select(func.count()).select_from(self.model)
            if specification is not None:
                stmt = stmt.where(specification.to_sql_filter())
            return self.db.scalar(stmt)

    def find_page(
        self,
        page_request: PageRequest,
        specification: Optional[Specification] = None
    ) -> Tuple[List[T], int]:
        """
        Retrieve one page of records.

        Args:
            page_request: Page index, size and sort
            specification: Optional filter

        Returns:
            Tuple of (records on this page, total matching records)
        """
        with self._guard("find_page"):
            stmt = select(self.model)
            if specification is not None:
                stmt = stmt.where(specification.to_sql_filter())
            stmt = stmt.order_by(*page_request.sort.to_sql(self.model))
            stmt = stmt.limit(page_request.size).offset(page_request.offset)
            items = list(self.db.scalars(stmt))
        return items, self.count(specification)

    def find_by(self, **filters: Any) -> List[T]:
        """
        Filter records by equality on arbitrary columns.

        Args:
            **filters: Keyword arguments for filtering; unknown names are ignored

        Returns:
            List of matching model instances
        """
        with self._guard("find_by"):
            stmt = select(self.model)
            for key, value in filters.items():
                if hasattr(self.model, key):
                    stmt = stmt.where(getattr(self.model, key) == value)
            return list(self.db.scalars(stmt))

    def add(self, obj: T) -> T:
        """Stage a record for the next flush without flushing."""
        self.db.add(obj)
        return obj

    def save(self, obj: T) -> T:
        """
        Insert or update a record.

        Returns:
            The persisted instance, with its key assigned
        """
        with self._guard("save"):
            self.db.add(obj)
            self.db.flush()
        return obj

    def save_all(self, objs: Iterable[T]) -> List[T]:
        """Insert or update several records in one flush."""
        objs = list(objs)
        if not objs:
            return []
        with self._guard("save_all"):
            self.db.add_all(objs)
            self.db.flush()
        return objs

    def delete(self, obj: T) -> None:
        with self._guard("delete"):
            self.db.delete(obj)
            self.db.flush()

    def delete_by_id(self, id: Any) -> bool:
        """
        Delete a record by its primary key.

        Returns:
            True if deleted, False if not found
        """
        obj = self.find_by_id(id)
        if obj is None:
            return False
        self.delete(obj)
        return True

    def delete_all(self, objs: Optional[Iterable[T]] = None) -> int:
        """
        Delete the given records, or every record when none are given.

        Returns:
            Number of records deleted
        """
        if objs is not None:
            objs = list(objs)
            for obj in objs:
                self.delete(obj)
            return len(objs)
        with self._guard("delete_all"):
            result = self.db.execute(sa_delete(self.model))
            return result.rowcount
