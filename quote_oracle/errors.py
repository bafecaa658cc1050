"""Error taxonomy for quote resolution."""
from __future__ import annotations


class QuoteError(Exception):
    """Base class for every terminal quote failure surfaced to callers."""


class BaseUnsupported(QuoteError):
    """The base asset of the request cannot be resolved."""


class QuoteUnsupported(QuoteError):
    """The quote asset of the request cannot be resolved."""


class NoPath(QuoteError):
    """Both assets are valid but no leg sequence connects them."""


class Overflow(QuoteError):
    """A conversion or scaling step exceeded the representable amount range."""


# ---------------------------------------------------------------------------
# Collaborator-level failures, mapped by the oracle onto the kinds above
# ---------------------------------------------------------------------------


class AssetUnsupported(Exception):
    """Asset metadata (decimals) is unavailable for an asset."""


class FeedUnavailable(Exception):
    """A direct feed cannot price the requested ordered pair."""
