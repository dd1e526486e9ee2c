"""
API request/response schemas, grouped by resource.
"""

from .common import MessageResponse, Money, NextOrder, Page, UtcDateTime

__all__ = ["MessageResponse", "Money", "NextOrder", "Page", "UtcDateTime"]
