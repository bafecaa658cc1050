"""Leg graph and bounded, deterministic path resolution — pure functions."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import permutations

from ..errors import NoPath
from ..models import Asset, Leg, LegDirection, Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_LEGS = 3
MAX_LEGS_LIMIT = 4


class LegGraph:
    """Immutable set of directly-priceable pairs as their feeds store them."""

    def __init__(self, pairs: Iterable[tuple[Asset, Asset]]) -> None:
        self._pairs: frozenset[tuple[Asset, Asset]] = frozenset(pairs)

    def __contains__(self, pair: object) -> bool:
        return pair in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def direct_leg(self, base: Asset, quote: Asset) -> Leg | None:
        """Return the leg pricing *base* in *quote*, preferring the stored orientation."""
        if (base, quote) in self._pairs:
            return Leg(base, quote, LegDirection.FORWARD)
        if (quote, base) in self._pairs:
            return Leg(quote, base, LegDirection.INVERTED)
        return None


def _chain(hops: tuple[Asset, ...], graph: LegGraph) -> Path | None:
    legs: list[Leg] = []
    for a, b in zip(hops, hops[1:]):
        leg = graph.direct_leg(a, b)
        if leg is None:
            return None
        legs.append(leg)
    return Path(tuple(legs))


def resolve_path(
    base: Asset,
    quote: Asset,
    graph: LegGraph,
    anchors: tuple[Asset, ...] = (),
    max_legs: int = DEFAULT_MAX_LEGS,
) -> Path:
    """Find the shortest leg sequence from *base* to *quote*.

    Intermediate hops are drawn only from *anchors*. Among candidates of the
    same length the one whose anchors come first in *anchors* wins, so the
    result never depends on set or dict iteration order.
    """
    if not 1 <= max_legs <= MAX_LEGS_LIMIT:
        raise ValueError(f"max_legs must be in 1..{MAX_LEGS_LIMIT}, got {max_legs}")

    if base == quote:
        return Path()

    direct = graph.direct_leg(base, quote)
    if direct is not None:
        return Path((direct,))

    # dedupe while keeping priority order
    intermediates = tuple(
        dict.fromkeys(a for a in anchors if a != base and a != quote)
    )

    for n_legs in range(2, max_legs + 1):
        for via in permutations(intermediates, n_legs - 1):
            path = _chain((base, *via, quote), graph)
            if path is not None:
                logger.debug(
                    "Resolved %s/%s via %s", base, quote, ", ".join(map(str, via))
                )
                return path

    raise NoPath(f"No path from {base} to {quote} within {max_legs} legs")
