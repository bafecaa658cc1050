"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Union

BPS_DENOMINATOR = 10_000

# ISO-4217 numeric codes of the well-known synthetic fiat assets.
FIAT_CODES: dict[str, int] = {
    "USD": 840,
    "EUR": 978,
    "JPY": 392,
    "GBP": 826,
    "CHF": 756,
    "CAD": 124,
    "AUD": 36,
    "NZD": 554,
    "CNY": 156,
    "XAU": 959,
    "XAG": 961,
}
_FIAT_SYMBOLS = {code: symbol for symbol, code in FIAT_CODES.items()}


@dataclass(frozen=True)
class TokenAsset:
    """External token identified by an opaque handle (address or coin type)."""

    handle: str

    def __str__(self) -> str:
        return self.handle


@dataclass(frozen=True)
class SyntheticFiat:
    """Fiat currency identified by its ISO-4217 numeric code."""

    code: int

    def __str__(self) -> str:
        return _FIAT_SYMBOLS.get(self.code, f"ISO{self.code:03d}")


Asset = Union[TokenAsset, SyntheticFiat]


@dataclass(frozen=True)
class FeedPrice:
    """Two-sided direct feed price: units of quote per whole unit of base."""

    bid: Fraction
    ask: Fraction

    def __post_init__(self) -> None:
        if self.bid <= 0:
            raise ValueError(f"Feed bid must be positive, got {self.bid}")
        if self.bid > self.ask:
            raise ValueError(f"Feed bid {self.bid} exceeds ask {self.ask}")

    @classmethod
    def single(cls, price: Fraction, spread_bps: int = 0) -> FeedPrice:
        """Build a two-sided price by widening *price* by ``spread_bps`` each side."""
        if spread_bps < 0 or spread_bps >= BPS_DENOMINATOR:
            raise ValueError(f"spread_bps out of range: {spread_bps}")
        half = Fraction(spread_bps, BPS_DENOMINATOR)
        return cls(bid=price * (1 - half), ask=price * (1 + half))

    def inverted(self) -> FeedPrice:
        """Reciprocal price: bid := 1/ask, ask := 1/bid."""
        return FeedPrice(bid=1 / self.ask, ask=1 / self.bid)


class LegDirection(Enum):
    """Orientation of a leg relative to how its feed stores the pair."""

    FORWARD = "forward"
    INVERTED = "inverted"


@dataclass(frozen=True)
class Leg:
    """A directly-priceable pair, stored as the feed stores it, plus direction."""

    feed_base: Asset
    feed_quote: Asset
    direction: LegDirection = LegDirection.FORWARD

    @property
    def base(self) -> Asset:
        if self.direction is LegDirection.INVERTED:
            return self.feed_quote
        return self.feed_base

    @property
    def quote(self) -> Asset:
        if self.direction is LegDirection.INVERTED:
            return self.feed_base
        return self.feed_quote

    def __str__(self) -> str:
        arrow = f"{self.base}->{self.quote}"
        if self.direction is LegDirection.INVERTED:
            return f"{arrow} (inverted {self.feed_base}/{self.feed_quote})"
        return arrow


@dataclass(frozen=True)
class Path:
    """Ordered legs mapping a base asset to a quote asset."""

    legs: tuple[Leg, ...] = ()

    def __post_init__(self) -> None:
        for prev, nxt in zip(self.legs, self.legs[1:]):
            if prev.quote != nxt.base:
                raise ValueError(f"Legs do not chain: {prev} then {nxt}")

    def __len__(self) -> int:
        return len(self.legs)

    @property
    def is_identity(self) -> bool:
        return not self.legs

    def assets(self) -> tuple[Asset, ...]:
        """Every asset visited by the path, base first."""
        if not self.legs:
            return ()
        return (self.legs[0].base,) + tuple(leg.quote for leg in self.legs)


@dataclass(frozen=True)
class TwoSidedAmount:
    """Bid and ask output amounts in quote-asset base units."""

    bid: int
    ask: int

    def __post_init__(self) -> None:
        if self.bid < 0:
            raise ValueError(f"Bid amount must be non-negative, got {self.bid}")
        if self.bid > self.ask:
            raise ValueError(f"Bid amount {self.bid} exceeds ask {self.ask}")

    @property
    def spread(self) -> int:
        return self.ask - self.bid


@dataclass(frozen=True)
class PricedLeg:
    """A leg with its feed price and the decimals of its effective base and quote."""

    leg: Leg
    price: FeedPrice
    base_decimals: int
    quote_decimals: int

    @property
    def effective_price(self) -> FeedPrice:
        """Price in the leg's effective orientation."""
        if self.leg.direction is LegDirection.INVERTED:
            return self.price.inverted()
        return self.price
