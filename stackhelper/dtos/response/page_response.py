"""
Page Response DTOs

Generic envelope for one page of a paginated listing.
"""

from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field

from stackhelper.constants import SortDirection
from stackhelper.repositories.paging import PageRequest

T = TypeVar('T')


class OrderResponse(BaseModel):
    """One applied sort order."""

    field: str
    direction: SortDirection


class Page(BaseModel, Generic[T]):
    """
    One page of results plus the totals needed to walk the rest.

    Pages are zero-based; `last` is true on the final page and on an empty
    result set.
    """

    content: List[T] = Field(description="Items on this page")
    page: int = Field(description="Zero-based page index")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Total matching items across all pages")
    total_pages: int = Field(description="Number of pages for this size")
    first: bool = Field(description="Whether this is the first page")
    last: bool = Field(description="Whether this is the last page")
    sort: List[OrderResponse] = Field(default_factory=list, description="Applied sort orders")

    @classmethod
    def of(cls, content: Sequence[T], request: PageRequest, total: int) -> "Page[T]":
        total_pages = request.total_pages(total)
        return cls(
            content=list(content),
            page=request.page,
            size=request.size,
            total_elements=total,
            total_pages=total_pages,
            first=request.page == 0,
            last=request.page >= total_pages - 1,
            sort=[OrderResponse(field=o.field, direction=o.direction) for o in request.sort],
        )
