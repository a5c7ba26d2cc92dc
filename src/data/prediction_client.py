"""Client for the bus sign prediction feed."""

from __future__ import annotations

import math
from typing import Any

import requests

from src.data.models import Arrival, RouteSnapshot, StopPredictions

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class PredictionClientError(Exception):
    """Base class for prediction feed failures."""


class NetworkError(PredictionClientError):
    """Raised when the feed cannot be reached (refused, timeout, DNS)."""


class HttpStatusError(PredictionClientError):
    """Raised when the feed answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        message = f"Prediction feed returned status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code


class ParseError(PredictionClientError):
    """Raised when the response body does not match the feed schema."""


class PredictionClient:
    """Fetches raw predictions for every stop the feed serves."""

    def __init__(self, base_url: str, timeout_seconds: float = 2.5) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @property
    def url(self) -> str:
        return f"{self._base_url}/predictions"

    def get_predictions(self) -> StopPredictions:
        """Fetch and parse the current predictions, keyed by stop id."""
        try:
            response = requests.get(self.url, headers=NO_CACHE_HEADERS, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise NetworkError(f"Prediction feed request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, _error_detail(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError("Prediction feed response was not valid JSON") from exc

        return parse_predictions(payload)


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text.strip()


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _parse_arrival(raw: Any, where: str) -> Arrival:
    if not isinstance(raw, dict):
        raise ParseError(f"{where}: arrival must be an object")
    bus_id = raw.get("bus_id")
    capacity = raw.get("capacity", "")
    seconds = raw.get("seconds")
    if not isinstance(bus_id, str):
        raise ParseError(f"{where}: 'bus_id' must be a string")
    if not isinstance(capacity, str):
        raise ParseError(f"{where}: 'capacity' must be a string")
    if not _is_number(seconds):
        raise ParseError(f"{where}: 'seconds' must be a finite number")
    # The feed extrapolates cached predictions and can overshoot zero.
    return Arrival(bus_id=bus_id, capacity=capacity, seconds=max(seconds, 0))


def _parse_route(raw: Any, where: str) -> RouteSnapshot:
    if not isinstance(raw, dict):
        raise ParseError(f"{where}: route group must be an object")
    route = raw.get("route")
    destination = raw.get("destination")
    arrivals = raw.get("arrivals")
    if not isinstance(route, str):
        raise ParseError(f"{where}: 'route' must be a string")
    if not isinstance(destination, str):
        raise ParseError(f"{where}: 'destination' must be a string")
    if not isinstance(arrivals, list):
        raise ParseError(f"{where}: 'arrivals' must be a list")
    return RouteSnapshot(
        route=route,
        destination=destination,
        arrivals=tuple(
            _parse_arrival(item, f"{where}.arrivals[{idx}]") for idx, item in enumerate(arrivals)
        ),
    )


def parse_predictions(payload: Any) -> StopPredictions:
    """Validate a decoded feed body and convert it to RouteSnapshots."""
    if not isinstance(payload, dict):
        raise ParseError("Prediction feed body must be an object keyed by stop id")

    predictions: StopPredictions = {}
    for stop_id, groups in payload.items():
        if not isinstance(groups, list):
            raise ParseError(f"Stop {stop_id}: route groups must be a list")
        predictions[str(stop_id)] = [
            _parse_route(group, f"Stop {stop_id}[{idx}]") for idx, group in enumerate(groups)
        ]
    return predictions


__all__ = [
    "PredictionClient",
    "PredictionClientError",
    "NetworkError",
    "HttpStatusError",
    "ParseError",
    "parse_predictions",
]
