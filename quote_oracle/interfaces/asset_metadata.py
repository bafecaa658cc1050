"""Asset metadata protocol — token decimals lookup."""
from typing import Protocol

from ..models import TokenAsset


class AssetMetadataProvider(Protocol):
    """Abstract interface for resolving a token's decimals.

    Implementations raise ``AssetUnsupported`` when the token is unknown.
    """

    async def decimals(self, asset: TokenAsset) -> int: ...
