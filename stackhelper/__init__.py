"""
stackhelper - generic CRUD layers (repository, mapper, service, router)
over SQLAlchemy models and FastAPI.
"""

__version__ = "1.0.0"
