"""Quote façade — resolves, composes and reports cross-pair quotes."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from math import isqrt
from typing import Union

from .config import EngineConfig, FeedConfig
from .engine.assets import decimals_of, parse_asset
from .engine.composer import compose_path
from .engine.converter import check_amount
from .engine.legs import LegGraph, resolve_path
from .errors import (
    AssetUnsupported,
    BaseUnsupported,
    FeedUnavailable,
    NoPath,
    QuoteError,
    QuoteUnsupported,
)
from .interfaces.asset_metadata import AssetMetadataProvider
from .interfaces.feed_provider import DirectFeedProvider
from .models import Asset, FeedPrice, Leg, Path, PricedLeg, TwoSidedAmount

logger = logging.getLogger(__name__)

AssetId = Union[str, int, Asset]


class _Settings:
    """Immutable snapshot of everything a request reads from configuration."""

    def __init__(
        self,
        engine: EngineConfig,
        feeds: tuple[FeedConfig, ...],
        providers: Mapping[str, DirectFeedProvider],
    ) -> None:
        self.engine = engine
        self.anchors: tuple[Asset, ...] = tuple(parse_asset(a) for a in engine.anchors)
        self.feeds: dict[tuple[Asset, Asset], FeedConfig] = {
            (parse_asset(f.base), parse_asset(f.quote)): f for f in feeds
        }
        self.providers = dict(providers)
        self.graph = LegGraph(self.feeds)

        for feed in self.feeds.values():
            if feed.provider not in self.providers:
                raise ValueError(
                    f"Feed {feed.base}/{feed.quote} references unknown provider "
                    f"'{feed.provider}'"
                )


class CrossOracle:
    """Price oracle answering direct and cross-pair bid/ask quotes.

    Every call is a pure function of its arguments plus the current answers of
    the metadata and feed collaborators. The configuration snapshot is read
    once per request, so ``replace_config`` never affects a request in flight.
    """

    def __init__(
        self,
        config: EngineConfig,
        feeds: tuple[FeedConfig, ...],
        metadata: AssetMetadataProvider,
        providers: Mapping[str, DirectFeedProvider],
    ) -> None:
        self._metadata = metadata
        self._settings = _Settings(config, feeds, providers)

    def replace_config(
        self,
        config: EngineConfig,
        feeds: tuple[FeedConfig, ...],
        providers: Mapping[str, DirectFeedProvider] | None = None,
    ) -> None:
        """Swap in a new configuration snapshot between requests.

        Feed providers are kept unless *providers* is given.
        """
        if providers is None:
            providers = self._settings.providers
        settings = _Settings(config, feeds, providers)
        self._settings = settings
        logger.info("Oracle configuration replaced (%d feeds)", len(settings.feeds))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def name(self) -> str:
        return self._settings.engine.name

    def describe(self, base: AssetId, quote: AssetId) -> str:
        """Human-readable account of how a pair currently resolves."""
        settings = self._settings
        engine = settings.engine
        try:
            base_asset = parse_asset(base)
            quote_asset = parse_asset(quote)
            path = resolve_path(
                base_asset, quote_asset, settings.graph, settings.anchors, engine.max_legs
            )
        except (QuoteError, ValueError) as e:
            return f"{engine.name} {base}/{quote}: unresolved ({type(e).__name__}: {e})"

        header = (
            f"{engine.name} {base_asset}/{quote_asset}: "
            f"{len(path)} leg(s), midpoint={engine.midpoint}, "
            f"anchors=[{', '.join(map(str, settings.anchors))}]"
        )
        # Token decimals are only resolved by quote requests.
        lines = [header, "  token decimals not checked"]
        if path.is_identity:
            lines.append("  identity")
        for leg in path.legs:
            feed = settings.feeds[(leg.feed_base, leg.feed_quote)]
            lines.append(f"  {leg} via {feed.provider} ({feed.spread_policy})")
        return "\n".join(lines)

    async def get_quotes(
        self, in_amount: int, base: AssetId, quote: AssetId
    ) -> tuple[int, int]:
        """Return (bid_out_amount, ask_out_amount) for *in_amount* of base."""
        result = await self._quote(self._settings, in_amount, base, quote)
        return result.bid, result.ask

    async def get_quote(self, in_amount: int, base: AssetId, quote: AssetId) -> int:
        """Return the midpoint output amount.

        ``geometric`` (default) yields ``isqrt(bid * ask)``: the input scaled by
        the geometric mean of the composed bid and ask prices, rounded down.
        ``arithmetic`` yields ``(bid + ask) // 2``. Both lie within [bid, ask].
        """
        settings = self._settings
        result = await self._quote(settings, in_amount, base, quote)
        if settings.engine.midpoint == "arithmetic":
            return (result.bid + result.ask) // 2
        return isqrt(result.bid * result.ask)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def _quote(
        self, settings: _Settings, in_amount: int, base: AssetId, quote: AssetId
    ) -> TwoSidedAmount:
        max_amount = settings.engine.max_amount
        check_amount(in_amount, max_amount)

        try:
            base_asset = parse_asset(base)
            base_decimals = await decimals_of(base_asset, self._metadata)
        except (AssetUnsupported, ValueError) as e:
            logger.warning("Base asset %s unsupported: %s", base, e)
            raise BaseUnsupported(f"Base asset {base} unsupported: {e}") from e

        try:
            quote_asset = parse_asset(quote)
            quote_decimals = await decimals_of(quote_asset, self._metadata)
        except (AssetUnsupported, ValueError) as e:
            logger.warning("Quote asset %s unsupported: %s", quote, e)
            raise QuoteUnsupported(f"Quote asset {quote} unsupported: {e}") from e

        path = resolve_path(
            base_asset,
            quote_asset,
            settings.graph,
            settings.anchors,
            settings.engine.max_legs,
        )
        logger.debug("Quote %s/%s resolved to %d leg(s)", base_asset, quote_asset, len(path))

        if path.is_identity:
            return compose_path(in_amount, (), max_amount)

        decimals = {base_asset: base_decimals, quote_asset: quote_decimals}
        priced_legs = await self._price_path(path, settings, decimals)
        return compose_path(in_amount, priced_legs, max_amount)

    async def _price_path(
        self,
        path: Path,
        settings: _Settings,
        decimals: dict[Asset, int],
    ) -> list[PricedLeg]:
        """Fetch every leg price and intermediate decimals concurrently."""
        intermediates = [a for a in path.assets() if a not in decimals]
        tasks = [
            asyncio.create_task(self._fetch_leg(leg, settings)) for leg in path.legs
        ] + [
            asyncio.create_task(decimals_of(a, self._metadata)) for a in intermediates
        ]
        try:
            results = await asyncio.gather(*tasks)
        except FeedUnavailable as e:
            logger.warning("Feed unavailable on path %s: %s", path.assets(), e)
            raise NoPath(f"Feed unavailable: {e}") from e
        except AssetUnsupported as e:
            logger.warning("Intermediate asset unsupported: %s", e)
            raise NoPath(f"Intermediate asset unsupported: {e}") from e
        finally:
            await _cancel_pending(tasks)

        prices = results[: len(path.legs)]
        decimals.update(zip(intermediates, results[len(path.legs) :]))

        return [
            PricedLeg(
                leg=leg,
                price=price,
                base_decimals=decimals[leg.base],
                quote_decimals=decimals[leg.quote],
            )
            for leg, price in zip(path.legs, prices)
        ]

    async def _fetch_leg(self, leg: Leg, settings: _Settings) -> FeedPrice:
        feed = settings.feeds[(leg.feed_base, leg.feed_quote)]
        provider = settings.providers[feed.provider]
        return await provider.fetch_price(leg.feed_base, leg.feed_quote)


async def _cancel_pending(tasks: list[asyncio.Task]) -> None:
    """Cancel queries still running after the request failed and reap them."""
    pending = [t for t in tasks if not t.done()]
    for task in pending:
        task.cancel()
    if pending:
        logger.debug("Cancelling %d in-flight lookups", len(pending))
    # Collects every outcome so no sibling exception goes unretrieved.
    await asyncio.gather(*tasks, return_exceptions=True)
