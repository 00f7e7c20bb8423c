"""Common middleware for venueops."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
