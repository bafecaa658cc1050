"""Unit tests for leg graph and path resolution — pure functions, no I/O."""
from __future__ import annotations

import pytest

from quote_oracle.engine.legs import LegGraph, resolve_path
from quote_oracle.errors import NoPath
from quote_oracle.models import Leg, LegDirection, SyntheticFiat, TokenAsset

USD = SyntheticFiat(840)
EUR = SyntheticFiat(978)
GBP = SyntheticFiat(826)
DAI = TokenAsset("DAI")
USDC = TokenAsset("USDC")
USDT = TokenAsset("USDT")


@pytest.fixture()
def graph() -> LegGraph:
    return LegGraph(
        [
            (EUR, USD),
            (GBP, USD),
            (USDC, USD),
            (DAI, USDC),
        ]
    )


# ---------------------------------------------------------------------------
# LegGraph.direct_leg
# ---------------------------------------------------------------------------


class TestDirectLeg:
    def test_forward(self, graph: LegGraph) -> None:
        assert graph.direct_leg(EUR, USD) == Leg(EUR, USD, LegDirection.FORWARD)

    def test_inverted(self, graph: LegGraph) -> None:
        leg = graph.direct_leg(USD, EUR)
        assert leg == Leg(EUR, USD, LegDirection.INVERTED)
        assert leg.base == USD and leg.quote == EUR

    def test_forward_preferred_when_both_stored(self) -> None:
        g = LegGraph([(EUR, USD), (USD, EUR)])
        assert g.direct_leg(USD, EUR).direction is LegDirection.FORWARD

    def test_missing(self, graph: LegGraph) -> None:
        assert graph.direct_leg(EUR, GBP) is None


# ---------------------------------------------------------------------------
# resolve_path
# ---------------------------------------------------------------------------


class TestResolvePath:
    def test_identity(self, graph: LegGraph) -> None:
        assert resolve_path(EUR, EUR, graph, (USD,)).is_identity

    def test_direct(self, graph: LegGraph) -> None:
        path = resolve_path(EUR, USD, graph, (USD,))
        assert path.legs == (Leg(EUR, USD),)

    def test_two_leg_cross_through_anchor(self, graph: LegGraph) -> None:
        path = resolve_path(EUR, GBP, graph, (USD,))
        assert path.legs == (
            Leg(EUR, USD),
            Leg(GBP, USD, LegDirection.INVERTED),
        )

    def test_three_leg_cross(self, graph: LegGraph) -> None:
        path = resolve_path(DAI, EUR, graph, (USD, USDC))
        assert path.legs == (
            Leg(DAI, USDC),
            Leg(USDC, USD),
            Leg(EUR, USD, LegDirection.INVERTED),
        )
        assert path.assets() == (DAI, USDC, USD, EUR)

    def test_intermediates_limited_to_anchors(self, graph: LegGraph) -> None:
        with pytest.raises(NoPath):
            resolve_path(DAI, EUR, graph, (USD,))

    def test_anchor_priority_breaks_ties(self) -> None:
        g = LegGraph([(EUR, USD), (GBP, USD), (EUR, USDT), (GBP, USDT)])
        via_usd = resolve_path(EUR, GBP, g, (USD, USDT))
        via_usdt = resolve_path(EUR, GBP, g, (USDT, USD))
        assert via_usd.assets() == (EUR, USD, GBP)
        assert via_usdt.assets() == (EUR, USDT, GBP)

    def test_independent_of_insertion_order(self) -> None:
        pairs = [(EUR, USD), (GBP, USD), (EUR, USDT), (GBP, USDT)]
        first = resolve_path(EUR, GBP, LegGraph(pairs), (USDT, USD))
        second = resolve_path(EUR, GBP, LegGraph(reversed(pairs)), (USDT, USD))
        assert first == second

    def test_shorter_path_beats_priority(self) -> None:
        g = LegGraph([(EUR, USDT), (USDT, GBP), (EUR, USD), (USD, USDC), (USDC, GBP)])
        path = resolve_path(EUR, GBP, g, (USD, USDC, USDT))
        assert len(path) == 2
        assert path.assets() == (EUR, USDT, GBP)

    def test_no_path(self, graph: LegGraph) -> None:
        with pytest.raises(NoPath, match="No path"):
            resolve_path(DAI, TokenAsset("LONELY"), graph, (USD, USDC))

    def test_path_bound(self) -> None:
        a, b, c, d, e = (TokenAsset(s) for s in "ABCDE")
        g = LegGraph([(a, b), (b, c), (c, d), (d, e)])
        anchors = (b, c, d)
        with pytest.raises(NoPath):
            resolve_path(a, e, g, anchors, max_legs=3)
        assert len(resolve_path(a, e, g, anchors, max_legs=4)) == 4

    def test_max_legs_one_disables_crosses(self, graph: LegGraph) -> None:
        with pytest.raises(NoPath):
            resolve_path(EUR, GBP, graph, (USD,), max_legs=1)

    @pytest.mark.parametrize("bad", [0, 5])
    def test_invalid_max_legs(self, graph: LegGraph, bad: int) -> None:
        with pytest.raises(ValueError, match="max_legs"):
            resolve_path(EUR, USD, graph, (USD,), max_legs=bad)
