"""Cross composition of per-leg conversions along a resolved path."""
from __future__ import annotations

from collections.abc import Sequence

from ..models import PricedLeg, TwoSidedAmount
from .converter import UINT256_MAX, check_amount, convert_leg


def compose_path(
    in_amount: int,
    priced_legs: Sequence[PricedLeg],
    max_amount: int = UINT256_MAX,
) -> TwoSidedAmount:
    """Chain leg conversions, carrying bid and ask separately.

    The bid of leg i is the input to leg i+1's bid conversion and likewise
    for the ask; the two sides are never recombined mid-path, so rounding
    only ever widens the final spread.
    """
    check_amount(in_amount, max_amount)
    for prev, nxt in zip(priced_legs, priced_legs[1:]):
        if prev.leg.quote != nxt.leg.base:
            raise ValueError(f"Legs do not chain: {prev.leg} then {nxt.leg}")

    bid = ask = in_amount
    for priced in priced_legs:
        bid = convert_leg(bid, priced, max_amount).bid
        ask = convert_leg(ask, priced, max_amount).ask

    return TwoSidedAmount(bid=bid, ask=ask)
