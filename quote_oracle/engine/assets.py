"""Asset identifier parsing and decimal normalization — no I/O of its own."""
from __future__ import annotations

import re

from ..errors import AssetUnsupported
from ..interfaces.asset_metadata import AssetMetadataProvider
from ..models import FIAT_CODES, Asset, SyntheticFiat, TokenAsset

SYNTHETIC_DECIMALS = 18
MAX_DECIMALS = 255

# Identifiers 1..999 are reserved for ISO-4217 numeric codes.
SYNTHETIC_CODE_MIN = 1
SYNTHETIC_CODE_MAX = 999

_HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{1,40}$")
_LONG_HEX_RE = re.compile(r"^0x[0-9a-fA-F]{41,}$")
_ADDRESS_SPACE = 2**160


def _asset_from_int(value: int) -> Asset:
    if value < 0 or value >= _ADDRESS_SPACE:
        raise ValueError(f"Asset identifier out of address range: {value}")
    if SYNTHETIC_CODE_MIN <= value <= SYNTHETIC_CODE_MAX:
        return SyntheticFiat(value)
    return TokenAsset(f"0x{value:040x}")


def parse_asset(identifier: str | int | Asset) -> Asset:
    """Map an opaque external identifier onto the asset variant.

    Examples:
        840 → SyntheticFiat(840)
        "EUR" → SyntheticFiat(978)
        "0x0000000000000000000000000000000000000348" → SyntheticFiat(840)
        "0x2::sui::SUI" → TokenAsset("0x2::sui::SUI")
    """
    if isinstance(identifier, (TokenAsset, SyntheticFiat)):
        return identifier
    if isinstance(identifier, bool):
        raise ValueError(f"Invalid asset identifier: {identifier!r}")
    if isinstance(identifier, int):
        return _asset_from_int(identifier)

    text = identifier.strip()
    if not text:
        raise ValueError("Asset identifier must not be empty")
    if text.isdigit():
        return _asset_from_int(int(text))
    if text.upper() in FIAT_CODES:
        return SyntheticFiat(FIAT_CODES[text.upper()])
    if _HEX_ADDRESS_RE.match(text):
        # Same canonical form as the integer spelling of the address.
        return _asset_from_int(int(text, 16))
    if _LONG_HEX_RE.match(text):
        return TokenAsset(text.lower())
    return TokenAsset(text)


def is_synthetic(identifier: str | int | Asset) -> bool:
    """Return True if *identifier* denotes a synthetic fiat asset."""
    return isinstance(parse_asset(identifier), SyntheticFiat)


async def decimals_of(asset: Asset, metadata: AssetMetadataProvider) -> int:
    """Resolve the decimal precision of *asset*.

    Synthetic fiat assets are fixed at 18 decimals and never looked up.
    Token decimals come from *metadata* and must fit in a uint8.
    """
    if isinstance(asset, SyntheticFiat):
        return SYNTHETIC_DECIMALS

    decimals = await metadata.decimals(asset)
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise AssetUnsupported(f"Non-integer decimals for {asset}: {decimals!r}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise AssetUnsupported(f"Decimals out of range for {asset}: {decimals}")
    return decimals
