"""
Custom exception classes for the library.

This module defines the error taxonomy shared by the repository, mapper,
service and controller layers. The controller layer is the only place where
these are turned into HTTP responses (see utils.error_handlers).
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when a requested key does not resolve to an entity"""

    def __init__(self, resource: str, key: Any, message: str | None = None):
        details = {"resource": resource, "key": key}
        msg = message or f"{resource} '{key}' not found"
        super().__init__(msg, details)


class ValidationRejectedError(ApplicationError):
    """Raised when a mapper refuses to merge a write DTO into an entity"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class InvalidQueryError(ApplicationError):
    """Raised when paging, sorting or search parameters are unusable"""

    def __init__(self, message: str, parameter: str | None = None):
        details = {"parameter": parameter} if parameter else {}
        super().__init__(message, details)


class PersistenceError(ApplicationError):
    """Raised when the underlying store rejects an operation"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
