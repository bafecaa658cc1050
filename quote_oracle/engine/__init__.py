"""Quote resolution engine — pure path and amount math."""
from .assets import decimals_of, is_synthetic, parse_asset
from .composer import compose_path
from .converter import convert_leg
from .legs import LegGraph, resolve_path

__all__ = [
    "LegGraph",
    "compose_path",
    "convert_leg",
    "decimals_of",
    "is_synthetic",
    "parse_asset",
    "resolve_path",
]
