"""Threaded poller that keeps the sign's view state fresh."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import threading
import time
from typing import Callable, Sequence

from src.data.models import RouteSnapshot
from src.data.prediction_client import PredictionClient, PredictionClientError
from src.logic.transformer import SPACIOUS, Density, transform

REFRESH_INTERVAL_SECONDS = 3.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the most recently committed refresh."""

    entries_a: tuple[RouteSnapshot, ...] = ()
    entries_b: tuple[RouteSnapshot, ...] = ()
    last_updated: datetime | None = None
    density: Density = SPACIOUS


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SignPoller:
    """Background poller that refreshes both sign columns on a fixed cadence.

    Only ``_commit`` writes the view state. Each ``start`` opens a new run
    generation and ``stop`` closes it, so a fetch that was still in flight when
    the poller stopped finds a stale generation and is dropped. At most one
    cycle runs at a time; a tick or ``refresh`` that finds one outstanding is
    skipped.
    """

    def __init__(
        self,
        client: PredictionClient,
        stop_ids: Sequence[str],
        refresh_interval_seconds: float = REFRESH_INTERVAL_SECONDS,
        on_update: Callable[[ViewState], None] | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if len(stop_ids) != 2:
            raise ValueError(f"Exactly two stop ids are tracked, got {len(stop_ids)}")
        self._client = client
        self._stop_ids = tuple(stop_ids)
        self._refresh_interval_seconds = refresh_interval_seconds
        self._on_update = on_update
        self._clock = clock
        self._state = ViewState()
        self._generation = 0
        self._running = False
        self._stopped = False
        self._lock = threading.Lock()
        self._cycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def get_state(self) -> ViewState:
        """Return the latest committed view state."""
        with self._lock:
            return self._state

    def start(self) -> None:
        """Refresh immediately, then keep refreshing on the cadence."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._stopped = False
            self._generation += 1
            generation = self._generation
            self._stop_event = threading.Event()
            stop_event = self._stop_event
        self._thread = threading.Thread(
            target=self._run_loop, args=(generation, stop_event), daemon=True
        )
        self._thread.start()
        logger.info("Poller started for stops %s", ", ".join(self._stop_ids))

    def stop(self) -> None:
        """Cancel future ticks and drop any refresh still in flight."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stopped = True
            self._generation += 1
            self._stop_event.set()
        logger.info("Poller stopped")

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def refresh(self) -> bool:
        """Run one fetch and transform in the calling thread.

        Allowed before the first ``start`` and while running; a stopped poller
        ignores it. Returns True when the result was committed.
        """
        with self._lock:
            if self._stopped:
                logger.info("Ignoring refresh on a stopped poller")
                return False
            generation = self._generation
        return self._run_cycle(generation)

    def _run_loop(self, generation: int, stop_event: threading.Event) -> None:
        next_tick = time.monotonic()
        while not stop_event.is_set():
            self._run_cycle(generation)

            next_tick += self._refresh_interval_seconds
            now = time.monotonic()
            skipped = 0
            while next_tick <= now:
                next_tick += self._refresh_interval_seconds
                skipped += 1
            if skipped:
                logger.debug("Refresh overran its interval; skipped %d tick(s)", skipped)
            stop_event.wait(timeout=next_tick - now)

    def _run_cycle(self, generation: int) -> bool:
        if not self._cycle_lock.acquire(blocking=False):
            logger.debug("Refresh already in flight; skipping")
            return False
        try:
            predictions = self._client.get_predictions()
            result = transform(predictions, self._stop_ids)
        except PredictionClientError as exc:
            logger.warning("Prediction refresh failed, keeping previous view: %s", exc)
            return False
        finally:
            self._cycle_lock.release()
        return self._commit(generation, result.entries_a, result.entries_b, result.density)

    def _commit(
        self,
        generation: int,
        entries_a: tuple[RouteSnapshot, ...],
        entries_b: tuple[RouteSnapshot, ...],
        density: Density,
    ) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.info("Discarding refresh that finished after the poller stopped")
                return False
            updated_at = self._clock()
            previous = self._state.last_updated
            if previous is not None and updated_at < previous:
                updated_at = previous
            state = ViewState(
                entries_a=entries_a,
                entries_b=entries_b,
                last_updated=updated_at,
                density=density,
            )
            self._state = state

        logger.debug(
            "Committed refresh: %d/%d routes, padding %dx%d",
            len(entries_a),
            len(entries_b),
            density.padding_x,
            density.padding_y,
        )
        if self._on_update is not None:
            try:
                self._on_update(state)
            except Exception:
                logger.exception("View update callback failed")
        return True


__all__ = ["REFRESH_INTERVAL_SECONDS", "ViewState", "SignPoller"]
