"""Cross-pair bid/ask quote oracle."""
from .errors import BaseUnsupported, NoPath, Overflow, QuoteError, QuoteUnsupported
from .oracle import CrossOracle

__all__ = [
    "BaseUnsupported",
    "CrossOracle",
    "NoPath",
    "Overflow",
    "QuoteError",
    "QuoteUnsupported",
]
