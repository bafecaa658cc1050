"""Static asset metadata — token decimals from configuration."""
from __future__ import annotations

from ..engine.assets import parse_asset
from ..errors import AssetUnsupported
from ..models import TokenAsset


class StaticMetadataProvider:
    """Resolve token decimals from a configured identifier → decimals map."""

    def __init__(self, token_decimals: dict[str, int]) -> None:
        self._decimals = {
            parse_asset(identifier): decimals
            for identifier, decimals in token_decimals.items()
        }

    async def decimals(self, asset: TokenAsset) -> int:
        try:
            return self._decimals[asset]
        except KeyError:
            raise AssetUnsupported(f"No decimals configured for {asset}") from None
