"""SUI asset metadata — token decimals from on-chain coin metadata."""
from __future__ import annotations

import logging

from ..errors import AssetUnsupported
from ..interfaces.chain import ChainClient
from ..models import TokenAsset

logger = logging.getLogger(__name__)


class SuiMetadataProvider:
    """Resolve token decimals via ``suix_getCoinMetadata``.

    Token handles are SUI coin types, e.g. ``0x2::sui::SUI``. Decimals never
    change for a published coin, so successful lookups are cached.
    """

    def __init__(self, chain_client: ChainClient) -> None:
        self._client = chain_client
        self._cache: dict[str, int] = {}

    async def decimals(self, asset: TokenAsset) -> int:
        coin_type = asset.handle
        if coin_type in self._cache:
            return self._cache[coin_type]

        try:
            metadata = await self._client.get_coin_metadata(coin_type)
        except RuntimeError as e:
            logger.error("Error fetching coin metadata for %s: %s", coin_type, e)
            raise AssetUnsupported(f"Metadata lookup failed for {coin_type}") from e

        if "decimals" not in metadata:
            raise AssetUnsupported(f"No coin metadata for {coin_type}")

        try:
            decimals = int(metadata["decimals"])
        except (TypeError, ValueError) as e:
            raise AssetUnsupported(
                f"Invalid decimals for {coin_type}: {metadata['decimals']!r}"
            ) from e
        self._cache[coin_type] = decimals
        logger.debug("Resolved %s decimals: %d", coin_type, decimals)
        return decimals
