"""Protocol interfaces for the quote oracle's external collaborators."""
from .asset_metadata import AssetMetadataProvider
from .chain import ChainClient
from .feed_provider import DirectFeedProvider

__all__ = ["AssetMetadataProvider", "ChainClient", "DirectFeedProvider"]
