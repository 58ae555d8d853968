"""
Response DTOs

Generic envelopes for outgoing API responses.
"""

from .page_response import OrderResponse, Page

__all__ = ["OrderResponse", "Page"]
