from __future__ import annotations

import math

from hypothesis import given, strategies as st
import pytest

from src.data.models import Arrival, RouteSnapshot
from src.logic.transformer import (
    COMPACT,
    SPACIOUS,
    compute_density,
    first_arrival_seconds,
    sort_routes,
    transform,
)


def _route(route: str, *seconds: float, destination: str = "Downtown") -> RouteSnapshot:
    arrivals = tuple(Arrival(bus_id=f"{route}-{idx}", capacity="EMPTY", seconds=s) for idx, s in enumerate(seconds))
    return RouteSnapshot(route=route, destination=destination, arrivals=arrivals)


def test_sort_routes_by_first_arrival() -> None:
    routes = [_route("67", 600), _route("61A", 20, 900), _route("61C", 300)]

    assert [r.route for r in sort_routes(routes)] == ["61A", "61C", "67"]


def test_routes_without_arrivals_sort_last() -> None:
    routes = [_route("P3"), _route("61B", 1200), _route("28X"), _route("61D", 45)]

    assert [r.route for r in sort_routes(routes)] == ["61D", "61B", "P3", "28X"]


def test_sort_is_stable_for_ties() -> None:
    routes = [_route("61A", 120, destination="Swissvale"), _route("61A", 120, destination="Downtown")]

    assert [r.destination for r in sort_routes(routes)] == ["Swissvale", "Downtown"]


def test_missing_stop_yields_empty_list() -> None:
    result = transform({"4407": [_route("61A", 20)]}, ["4407", "7117"])

    assert [r.route for r in result.entries_a] == ["61A"]
    assert result.entries_b == ()
    assert result.density == SPACIOUS


def test_density_thresholds() -> None:
    assert compute_density(0) == SPACIOUS
    assert compute_density(6) == SPACIOUS
    assert compute_density(7) == COMPACT
    assert (SPACIOUS.padding_x, SPACIOUS.padding_y) == (16, 12)
    assert (COMPACT.padding_x, COMPACT.padding_y) == (4, 3)


def test_density_uses_longer_side() -> None:
    side_a = [_route(str(n), n * 60) for n in range(7)]
    side_b = [_route("61A", 20)]

    assert transform({"A": side_a, "B": side_b}, ["A", "B"]).density == COMPACT
    assert transform({"A": side_a[:6], "B": side_b}, ["A", "B"]).density == SPACIOUS


def test_transform_requires_two_stops() -> None:
    with pytest.raises(ValueError):
        transform({}, ["A"])


_routes = st.lists(
    st.builds(
        RouteSnapshot,
        route=st.sampled_from(["61A", "61B", "61C", "61D", "67", "69"]),
        destination=st.sampled_from(["Downtown", "Swissvale", "McKeesport"]),
        arrivals=st.lists(
            st.builds(
                Arrival,
                bus_id=st.text(min_size=1, max_size=4),
                capacity=st.sampled_from(["EMPTY", "HALF_EMPTY", "FULL", ""]),
                seconds=st.integers(min_value=0, max_value=7200),
            ),
            max_size=3,
        ).map(tuple),
    ),
    max_size=12,
)


@given(_routes)
def test_sorted_routes_are_non_decreasing(routes: list[RouteSnapshot]) -> None:
    ordered = sort_routes(routes)
    keys = [first_arrival_seconds(r) for r in ordered]

    assert len(ordered) == len(routes)
    assert keys == sorted(keys)
    seen_empty = False
    for key in keys:
        if math.isinf(key):
            seen_empty = True
        else:
            assert not seen_empty
