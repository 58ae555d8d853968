"""
Error handling decorators for API endpoints.

The controller layer is the single catch boundary: services let errors
propagate, and these decorators decide the HTTP-visible shape.
"""

import inspect
import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException, Response

from stackhelper.constants import HTTPStatus
from stackhelper.exceptions import (
    ApplicationError,
    ConfigurationError,
    InvalidQueryError,
    NotFoundError,
    PersistenceError,
    ValidationRejectedError,
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Translate an exception raised below the controller into an HTTPException.

    NotFound -> 404, InvalidQuery/ValidationRejected -> 400, everything
    else -> 500 carrying the error message.
    """
    if isinstance(error, HTTPException):
        return error
    if isinstance(error, NotFoundError):
        logger.info(f"{operation_name} - {error.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=error.message)
    if isinstance(error, (InvalidQueryError, ValidationRejectedError)):
        logger.warning(f"{operation_name} - Invalid request: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, PersistenceError):
        logger.error(f"{operation_name} - Persistence error: {error.message}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error.message)
    if isinstance(error, ConfigurationError):
        logger.error(f"{operation_name} - Configuration error: {error.message}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error.message)
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error.message)
    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(error) or type(error).__name__)


def handle_api_errors(operation_name: str):
    """
    Decorator to handle API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "pets.create")

    Example:
        @router.post("/")
        @handle_api_errors("pets.create")
        def create(...):
            return service.create(dto)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def handle_delete_errors(operation_name: str):
    """
    Decorator for delete endpoints: any failure is logged and answered with
    an empty 204 instead of an error status.
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{operation_name} - Delete failed, answering 204: {e}", exc_info=True)
                return Response(status_code=HTTPStatus.NO_CONTENT)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{operation_name} - Delete failed, answering 204: {e}", exc_info=True)
                return Response(status_code=HTTPStatus.NO_CONTENT)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
