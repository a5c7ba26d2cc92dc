"""Two-column sign layout built from the committed view state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from src.data.models import RouteSnapshot
from src.data.poller import ViewState
from src.logic.formatter import (
    CapacityInfo,
    Countdown,
    DEFAULT_ROUTE_COLOR,
    NO_DATA_LABEL,
    capacity_info,
    format_last_updated,
    primary_countdown,
    route_color,
    secondary_text,
)
from src.logic.transformer import SPACIOUS, Density

PLACEHOLDER_ROUTE = "No Buses Running"


@dataclass(frozen=True)
class ColumnEntry:
    """One rendered row of a sign column."""

    key: tuple[str, str]
    route: str
    destination: str
    countdown: Countdown
    secondary_text: str
    capacity: CapacityInfo | None
    route_color: tuple[int, int, int]
    padding: Density
    placeholder: bool = False


@dataclass(frozen=True)
class Column:
    stop_id: str
    entries: tuple[ColumnEntry, ...]


@dataclass(frozen=True)
class SignLayout:
    """Both sign sides plus the footer text."""

    columns: tuple[Column, Column]
    updated_text: str


def placeholder_entry() -> ColumnEntry:
    return ColumnEntry(
        key=(PLACEHOLDER_ROUTE, ""),
        route=PLACEHOLDER_ROUTE,
        destination="",
        countdown=Countdown(NO_DATA_LABEL, None),
        secondary_text="",
        capacity=None,
        route_color=DEFAULT_ROUTE_COLOR,
        padding=SPACIOUS,
        placeholder=True,
    )


def build_entry(snapshot: RouteSnapshot, density: Density) -> ColumnEntry:
    return ColumnEntry(
        key=snapshot.key,
        route=snapshot.route,
        destination=snapshot.destination,
        countdown=primary_countdown(snapshot),
        secondary_text=secondary_text(snapshot),
        capacity=capacity_info(snapshot),
        route_color=route_color(snapshot.route),
        padding=density,
    )


def build_column(stop_id: str, routes: Sequence[RouteSnapshot], density: Density) -> Column:
    """Map sorted routes to entries; an empty stop gets a single placeholder."""
    if not routes:
        return Column(stop_id=stop_id, entries=(placeholder_entry(),))
    return Column(
        stop_id=stop_id,
        entries=tuple(build_entry(snapshot, density) for snapshot in routes),
    )


def build_layout(state: ViewState, stop_ids: Sequence[str]) -> SignLayout:
    stop_a, stop_b = stop_ids
    return SignLayout(
        columns=(
            build_column(stop_a, state.entries_a, state.density),
            build_column(stop_b, state.entries_b, state.density),
        ),
        updated_text=format_last_updated(state.last_updated),
    )


__all__ = [
    "PLACEHOLDER_ROUTE",
    "ColumnEntry",
    "Column",
    "SignLayout",
    "placeholder_entry",
    "build_entry",
    "build_column",
    "build_layout",
]
