"""Direct feed protocol — price source for a single ordered pair."""
from typing import Protocol

from ..models import Asset, FeedPrice


class DirectFeedProvider(Protocol):
    """Abstract interface for fetching a two-sided price for an ordered pair.

    Implementations raise ``FeedUnavailable`` when the pair cannot be priced.
    """

    async def fetch_price(self, base: Asset, quote: Asset) -> FeedPrice: ...
