"""Turn raw per-stop predictions into sorted sign columns."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Sequence

from src.data.models import RouteSnapshot, StopPredictions

SPACIOUS_MAX_ROUTES = 6


@dataclass(frozen=True)
class Density:
    """Padding preset for sign rows."""

    padding_x: int
    padding_y: int


SPACIOUS = Density(padding_x=16, padding_y=12)
COMPACT = Density(padding_x=4, padding_y=3)


@dataclass(frozen=True)
class TransformResult:
    """Sorted routes for both sign sides plus the layout density."""

    entries_a: tuple[RouteSnapshot, ...]
    entries_b: tuple[RouteSnapshot, ...]
    density: Density


def first_arrival_seconds(snapshot: RouteSnapshot) -> float:
    """Seconds until the next bus, or infinity when none is predicted."""
    if not snapshot.arrivals:
        return math.inf
    return snapshot.arrivals[0].seconds


def sort_routes(routes: Iterable[RouteSnapshot]) -> tuple[RouteSnapshot, ...]:
    """Order routes by their next arrival; ties keep feed order."""
    return tuple(sorted(routes, key=first_arrival_seconds))


def compute_density(count: int) -> Density:
    return SPACIOUS if count <= SPACIOUS_MAX_ROUTES else COMPACT


def transform(predictions: StopPredictions, stop_ids: Sequence[str]) -> TransformResult:
    """Sort both tracked stops and pick a density from the longer side."""
    if len(stop_ids) != 2:
        raise ValueError(f"Exactly two stop ids are tracked, got {len(stop_ids)}")

    stop_a, stop_b = stop_ids
    entries_a = sort_routes(predictions.get(stop_a, []))
    entries_b = sort_routes(predictions.get(stop_b, []))
    density = compute_density(max(len(entries_a), len(entries_b)))
    return TransformResult(entries_a=entries_a, entries_b=entries_b, density=density)


__all__ = [
    "Density",
    "SPACIOUS",
    "COMPACT",
    "SPACIOUS_MAX_ROUTES",
    "TransformResult",
    "first_arrival_seconds",
    "sort_routes",
    "compute_density",
    "transform",
]
