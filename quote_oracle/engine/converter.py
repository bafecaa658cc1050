"""Single-leg bid/ask conversion with rounding away from the midpoint."""
from __future__ import annotations

from fractions import Fraction

from ..errors import Overflow
from ..models import PricedLeg, TwoSidedAmount

UINT256_MAX = 2**256 - 1


def floor_div(value: Fraction) -> int:
    return value.numerator // value.denominator


def ceil_div(value: Fraction) -> int:
    return -(-value.numerator // value.denominator)


def check_amount(amount: int, max_amount: int = UINT256_MAX) -> int:
    """Validate an unsigned integer amount against the representable range."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    if amount > max_amount:
        raise Overflow(f"Amount {amount} exceeds maximum {max_amount}")
    return amount


def scaled(amount: int, price: Fraction, base_decimals: int, quote_decimals: int) -> Fraction:
    """Exact quote-unit value of *amount* base units at *price*.

    out = amount * price * 10^quote_decimals / 10^base_decimals
    """
    return amount * price * Fraction(10**quote_decimals, 10**base_decimals)


def convert_leg(
    in_amount: int, priced: PricedLeg, max_amount: int = UINT256_MAX
) -> TwoSidedAmount:
    """Convert *in_amount* through one leg.

    The leg's effective price is applied exactly, then the bid output is
    floored and the ask output ceiled. Inverted legs use 1/ask as bid and
    1/bid as ask.
    """
    check_amount(in_amount, max_amount)
    price = priced.effective_price

    bid = floor_div(scaled(in_amount, price.bid, priced.base_decimals, priced.quote_decimals))
    ask = ceil_div(scaled(in_amount, price.ask, priced.base_decimals, priced.quote_decimals))

    if ask > max_amount:
        raise Overflow(f"Leg {priced.leg} output {ask} exceeds maximum {max_amount}")
    return TwoSidedAmount(bid=bid, ask=ask)
