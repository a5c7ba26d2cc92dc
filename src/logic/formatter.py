"""Countdown, capacity and route-color formatting for sign entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import math

from src.data.models import EMPTY, FULL, HALF_EMPTY, RouteSnapshot

APPROACHING_SECONDS = 30
APPROACHING_LABEL = "Approaching"
NO_DATA_LABEL = "N/A"
SECONDARY_SLOTS = 2

COLOR_CAPACITY_EMPTY = (0, 200, 0)
COLOR_CAPACITY_HALF = (220, 180, 0)
COLOR_CAPACITY_FULL = (200, 0, 0)

# label, color
CAPACITY_TABLE: dict[str, tuple[str, tuple[int, int, int]]] = {
    EMPTY: ("Empty", COLOR_CAPACITY_EMPTY),
    HALF_EMPTY: ("Some seats", COLOR_CAPACITY_HALF),
    FULL: ("Full", COLOR_CAPACITY_FULL),
}

ROUTE_COLORS: dict[str, tuple[int, int, int]] = {
    "61A": (0, 114, 206),
    "61B": (0, 150, 57),
    "61C": (232, 119, 34),
    "61D": (124, 58, 183),
    "67": (218, 41, 28),
    "69": (0, 163, 173),
    "28X": (255, 199, 44),
    "P3": (140, 82, 31),
}
DEFAULT_ROUTE_COLOR = (96, 96, 96)


@dataclass(frozen=True)
class Countdown:
    """Display text for one arrival slot."""

    text: str
    minutes: int | None
    is_approaching: bool = False


@dataclass(frozen=True)
class CapacityInfo:
    label: str
    color: tuple[int, int, int]


def format_minutes(seconds: float) -> int:
    """Minutes until arrival, rounded up."""
    return math.ceil(seconds / 60)


def format_countdown(seconds: float) -> Countdown:
    """Countdown for the primary slot; under 30 seconds reads as approaching."""
    if seconds < APPROACHING_SECONDS:
        return Countdown(APPROACHING_LABEL, 0, is_approaching=True)
    minutes = format_minutes(seconds)
    return Countdown(str(minutes), minutes)


def primary_countdown(snapshot: RouteSnapshot) -> Countdown:
    if not snapshot.arrivals:
        return Countdown(NO_DATA_LABEL, None)
    return format_countdown(snapshot.arrivals[0].seconds)


def secondary_minutes(snapshot: RouteSnapshot) -> list[int]:
    """Rounded minutes for the buses after the next one."""
    following = snapshot.arrivals[1 : 1 + SECONDARY_SLOTS]
    return [format_minutes(arrival.seconds) for arrival in following]


def secondary_text(snapshot: RouteSnapshot) -> str:
    minutes = secondary_minutes(snapshot)
    if not minutes:
        return ""
    return ", ".join(str(value) for value in minutes) + " min"


def capacity_info(snapshot: RouteSnapshot) -> CapacityInfo | None:
    """Capacity label for the next bus, or None when unknown."""
    if not snapshot.arrivals:
        return None
    entry = CAPACITY_TABLE.get(snapshot.arrivals[0].capacity)
    if entry is None:
        return None
    label, color = entry
    return CapacityInfo(label=label, color=color)


def route_color(route: str) -> tuple[int, int, int]:
    return ROUTE_COLORS.get(route, DEFAULT_ROUTE_COLOR)


def format_last_updated(updated_at: datetime | None) -> str:
    if updated_at is None:
        return "Updated --"
    clock = updated_at.astimezone().strftime("%I:%M:%S %p")
    return f"Updated {clock.lstrip('0')}"


__all__ = [
    "APPROACHING_LABEL",
    "NO_DATA_LABEL",
    "CAPACITY_TABLE",
    "ROUTE_COLORS",
    "DEFAULT_ROUTE_COLOR",
    "Countdown",
    "CapacityInfo",
    "format_minutes",
    "format_countdown",
    "primary_countdown",
    "secondary_minutes",
    "secondary_text",
    "capacity_info",
    "route_color",
    "format_last_updated",
]
