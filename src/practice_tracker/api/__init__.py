"""Backend API client."""

from .client import ConsistencyClient

__all__ = ["ConsistencyClient"]
