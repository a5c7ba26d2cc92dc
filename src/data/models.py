"""Prediction data structures shared by the client, poller and renderer."""

from __future__ import annotations

from dataclasses import dataclass

EMPTY = "EMPTY"
HALF_EMPTY = "HALF_EMPTY"
FULL = "FULL"

CAPACITY_CODES = (EMPTY, HALF_EMPTY, FULL)


@dataclass(frozen=True)
class Arrival:
    """Single predicted bus arrival."""

    bus_id: str
    capacity: str
    seconds: float


@dataclass(frozen=True)
class RouteSnapshot:
    """Arrivals for one (route, destination) pair at a stop."""

    route: str
    destination: str
    arrivals: tuple[Arrival, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        return (self.route, self.destination)


StopPredictions = dict[str, list[RouteSnapshot]]


__all__ = [
    "EMPTY",
    "HALF_EMPTY",
    "FULL",
    "CAPACITY_CODES",
    "Arrival",
    "RouteSnapshot",
    "StopPredictions",
]
