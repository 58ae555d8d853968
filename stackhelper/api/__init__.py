"""
HTTP layer: the generic CRUD router builder and the routers built with it.
"""

from .crud_router import build_crud_router

__all__ = ["build_crud_router"]
