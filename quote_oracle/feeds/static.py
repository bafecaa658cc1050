"""Static direct feed — serves configured prices for configured pairs."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import FeedConfig
from ..engine.assets import parse_asset
from ..errors import FeedUnavailable
from ..models import Asset, FeedPrice

logger = logging.getLogger(__name__)


def feed_price_from_config(feed: FeedConfig) -> FeedPrice:
    """Build the two-sided price a feed entry describes."""
    if feed.price is not None:
        return FeedPrice.single(feed.price, feed.spread_bps)
    if feed.bid is None or feed.ask is None:
        raise ValueError(f"Feed {feed.base}/{feed.quote} has no price")
    return FeedPrice(bid=feed.bid, ask=feed.ask)


class StaticFeedProvider:
    """Serve fixed prices for the ordered pairs it was configured with."""

    def __init__(self, feeds: Iterable[FeedConfig]) -> None:
        self._prices: dict[tuple[Asset, Asset], FeedPrice] = {}
        for feed in feeds:
            pair = (parse_asset(feed.base), parse_asset(feed.quote))
            self._prices[pair] = feed_price_from_config(feed)

    @property
    def pairs(self) -> tuple[tuple[Asset, Asset], ...]:
        return tuple(self._prices)

    async def fetch_price(self, base: Asset, quote: Asset) -> FeedPrice:
        """Return the stored price for exactly (base, quote)."""
        try:
            return self._prices[(base, quote)]
        except KeyError:
            raise FeedUnavailable(f"No static feed for {base}/{quote}") from None
