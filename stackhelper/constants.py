"""
Library-wide constants.

This module centralizes magic strings and numbers used by the CRUD layers
to improve maintainability and reduce duplication.
"""
from enum import Enum


class SortDirection(str, Enum):
    """Direction of a single sort order."""

    ASC = 'ASC'
    DESC = 'DESC'

    @classmethod
    def from_prefix(cls, token: str) -> 'SortDirection':
        """'-name' sorts descending, 'name' or '+name' ascending."""
        return cls.DESC if token.startswith('-') else cls.ASC


class SearchOperator(str, Enum):
    """
    Comparison operators accepted in search criteria.

    EMPTY matches NULL values and takes no operand. LIKE takes a raw SQL
    pattern; STARTS_WITH, ENDS_WITH and CONTAINS wrap the operand themselves.
    """

    EMPTY = 'EMPTY'
    EQUALS = 'EQUALS'
    NOT_EQUALS = 'NOT_EQUALS'
    GREATER_THAN = 'GREATER_THAN'
    LESS_THAN = 'LESS_THAN'
    LIKE = 'LIKE'
    STARTS_WITH = 'STARTS_WITH'
    ENDS_WITH = 'ENDS_WITH'
    CONTAINS = 'CONTAINS'

    @classmethod
    def requires_value(cls, operator: 'SearchOperator') -> bool:
        """Check if this operator needs an operand"""
        return operator is not cls.EMPTY


class HTTPStatus:
    """HTTP status codes used throughout the library"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500


class Paging:
    """Query parameter names and separators for list endpoints"""

    PAGE_PARAM = 'page'
    SIZE_PARAM = 'size'
    SORT_PARAM = 'sort'
    SEARCH_PARAM = 'search'
    SORT_SEPARATOR = ','
    CRITERION_SEPARATOR = ':'
