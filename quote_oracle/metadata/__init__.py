"""Asset metadata provider implementations."""
from .static import StaticMetadataProvider
from .sui import SuiMetadataProvider

__all__ = ["StaticMetadataProvider", "SuiMetadataProvider"]
