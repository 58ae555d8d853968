"""
Paging and sorting requests.

A sort expression is an ordered list of field names, each optionally
prefixed with '-' (descending) or '+' (ascending). Expressions may arrive
comma-separated, as repeated query values, or both:

    Sort.parse("-name,id")          -> name DESC, id ASC
    Sort.parse(["-name", "id"])     -> same
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Union

from sqlalchemy import inspect as sa_inspect

from stackhelper.constants import SortDirection, Paging
from stackhelper.exceptions import InvalidQueryError


@dataclass(frozen=True)
class Order:
    """A single field ordering."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class Sort:
    """Ordered collection of field orderings. Empty means natural order."""

    orders: tuple = ()

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def parse(cls, raw: Union[None, str, Sequence[str]]) -> "Sort":
        """
        Parse a sort expression.

        Args:
            raw: Comma-separated string, list of strings, or None

        Returns:
            Sort instance (unsorted when raw is empty)

        Raises:
            InvalidQueryError: If a token has a prefix but no field name
        """
        if raw is None:
            return cls.unsorted()
        values = [raw] if isinstance(raw, str) else list(raw)

        orders: List[Order] = []
        seen = set()
        for value in values:
            for token in value.split(Paging.SORT_SEPARATOR):
                token = token.strip()
                if not token:
                    continue
                name = token.lstrip('+-').strip()
                if not name:
                    raise InvalidQueryError(f"Invalid sort token '{token}'", parameter=Paging.SORT_PARAM)
                if name in seen:
                    continue
                seen.add(name)
                orders.append(Order(name, SortDirection.from_prefix(token)))
        return cls(tuple(orders))

    def __iter__(self):
        return iter(self.orders)

    def __bool__(self):
        return bool(self.orders)

    def fields(self) -> List[str]:
        return [order.field for order in self.orders]

    def to_sql(self, model) -> list:
        """
        Convert to SQLAlchemy ORDER BY clauses for the given model.

        The primary key is appended as a tie-breaker (unless already sorted
        on) so that consecutive pages never overlap or skip rows.

        Raises:
            InvalidQueryError: If a field is not a mapped column of the model
        """
        columns = mapped_columns(model)
        clauses = []
        for order in self.orders:
            column = columns.get(order.field)
            if column is None:
                raise InvalidQueryError(
                    f"Cannot sort {model.__name__} by unknown field '{order.field}'",
                    parameter=Paging.SORT_PARAM
                )
            clauses.append(column.desc() if order.descending else column.asc())

        sorted_fields = set(self.fields())
        for pk in sa_inspect(model).primary_key:
            if pk.key not in sorted_fields:
                clauses.append(getattr(model, pk.key).asc())
        return clauses


def mapped_columns(model) -> dict:
    """Map of attribute name -> instrumented column attribute."""
    mapper = sa_inspect(model)
    return {attr.key: getattr(model, attr.key) for attr in mapper.column_attrs}


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request."""

    page: int = 0
    size: int = 20
    sort: Sort = field(default_factory=Sort.unsorted)

    def __post_init__(self):
        if self.page < 0:
            raise InvalidQueryError(f"Page index must be >= 0, got {self.page}", parameter=Paging.PAGE_PARAM)
        if self.size < 1:
            raise InvalidQueryError(f"Page size must be > 0, got {self.size}", parameter=Paging.SIZE_PARAM)

    @classmethod
    def of(cls, page: int, size: int, sort: Union[None, str, Sequence[str], Sort] = None) -> "PageRequest":
        if not isinstance(sort, Sort):
            sort = Sort.parse(sort)
        return cls(page=page, size=size, sort=sort)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def total_pages(self, total: int) -> int:
        return (total + self.size - 1) // self.size if total else 0

