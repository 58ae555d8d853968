"""
Utility functions and decorators.
"""

from .error_handlers import handle_api_errors, handle_delete_errors
from .logging_utils import StructuredLogger, log_operation, set_logging_context, clear_logging_context

__all__ = [
    "handle_api_errors",
    "handle_delete_errors",
    "StructuredLogger",
    "log_operation",
    "set_logging_context",
    "clear_logging_context",
]
