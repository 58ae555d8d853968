"""
Structured Logging Utilities

Adds request-scoped context (request id, resource, key...) to log records
through a ContextVar, and a decorator that logs the start, end and failure
of service operations.
"""

import inspect
import logging
from contextvars import ContextVar
from functools import wraps
from typing import Any, Dict, Optional


_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Keyword arguments copied into the log context by log_operation
CONTEXT_ARGUMENTS = ("key", "keys", "resource", "page", "size", "sort")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Pet created", extra={"resource": "pets", "key": 3})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    Example:
        set_logging_context(request_id="abc-123", path="/pets")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str, level: int = logging.DEBUG):
    """
    Decorator to log operation start/end with structured context.

    Failures are logged with the exception type and re-raised unchanged.

    Args:
        operation_name: Name of the operation
        level: Level for the start/completion records

    Example:
        @log_operation("create")
        def create(self, dto):
            ...
    """
    def decorator(func):
        def _context(args, kwargs) -> Dict[str, Any]:
            context = {"operation": operation_name}
            owner = args[0] if args else None
            resource = getattr(owner, "resource_name", None)
            if resource:
                context["resource"] = resource
            for key in CONTEXT_ARGUMENTS:
                if key in kwargs:
                    context[key] = kwargs[key]
            return context

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(args, kwargs)
            logger.logger.log(level, f"Starting {operation_name}", extra=logger._add_context(context))
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise
            logger.logger.log(level, f"Completed {operation_name}", extra=logger._add_context(context))
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(args, kwargs)
            logger.logger.log(level, f"Starting {operation_name}", extra=logger._add_context(context))
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise
            logger.logger.log(level, f"Completed {operation_name}", extra=logger._add_context(context))
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
