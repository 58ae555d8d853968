"""
Request DTOs

DTOs for incoming API request parameters that are richer than plain
scalars, parsed at the API boundary.
"""

from .search_request import SearchCriterion

__all__ = ["SearchCriterion"]
