"""Direct feed provider implementations."""
from .static import StaticFeedProvider

__all__ = ["StaticFeedProvider"]
