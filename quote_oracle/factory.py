"""Wiring — builds the oracle and its collaborators from configuration."""
from __future__ import annotations

import logging
from typing import Callable

from .chains.sui import SuiClient
from .config import AppConfig
from .feeds import StaticFeedProvider
from .interfaces.asset_metadata import AssetMetadataProvider
from .interfaces.feed_provider import DirectFeedProvider
from .metadata import StaticMetadataProvider, SuiMetadataProvider
from .oracle import CrossOracle

logger = logging.getLogger(__name__)

# Registry of feed provider factories keyed by provider name.
_FEED_FACTORIES: dict[str, Callable[[AppConfig], DirectFeedProvider]] = {
    "static": lambda cfg: StaticFeedProvider(
        f for f in cfg.feeds if f.provider == "static"
    ),
}


def _build_metadata(config: AppConfig) -> AssetMetadataProvider:
    meta = config.metadata
    if meta.provider == "sui":
        return SuiMetadataProvider(SuiClient(config.chains[meta.chain]))
    return StaticMetadataProvider(meta.token_decimals)


def build_oracle(
    config: AppConfig,
    metadata: AssetMetadataProvider | None = None,
    providers: dict[str, DirectFeedProvider] | None = None,
) -> CrossOracle:
    """Build a CrossOracle from an AppConfig.

    *metadata* and *providers* replace the configured collaborators, e.g. to
    plug in a live feed.
    """
    providers = dict(providers or {})
    if not providers:
        for name in sorted({f.provider for f in config.feeds}):
            factory = _FEED_FACTORIES.get(name)
            if factory:
                providers[name] = factory(config)
            else:
                logger.warning("No feed provider factory for '%s'", name)

    if metadata is None:
        metadata = _build_metadata(config)

    oracle = CrossOracle(config.oracle, config.feeds, metadata, providers)
    logger.info(
        "Built %s with %d feeds and %d anchors",
        oracle.name(),
        len(config.feeds),
        len(config.oracle.anchors),
    )
    return oracle
