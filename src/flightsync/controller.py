"""Selection-driven flight synchronization controller."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable
from typing import Any

from flightsync.channel import SelectionChannel
from flightsync.exceptions import TransportError
from flightsync.lookup import FlightLookupService
from flightsync.models import (
    Airport,
    AirportSelectedMessage,
    ConcreteSelection,
    FlightFilter,
    FlightRecord,
    FlightSet,
    NearestRequested,
    SyncState,
)

_logger = logging.getLogger(__name__)


class SyncController:
    """Owns the current selection and the arrivals/departures it drives.

    Every selection change bumps an epoch, clears both lists and starts a
    fetch task. A fetch only lands if its epoch is still current, so a
    slow answer for an airport the user already left is dropped instead
    of overwriting the newer view.

    All methods except :meth:`post_selection` must be called on the event
    loop that owns the controller.

    Usage::

        async with SyncController(lookup, channel=channel) as controller:
            controller.set_selection(Airport(code="OSL"))
            await controller.wait_idle()
            print(controller.arrivals)
    """

    def __init__(
        self,
        lookup: FlightLookupService,
        *,
        channel: SelectionChannel | None = None,
        flight_filter: FlightFilter | None = None,
        on_state_changed: Callable[[SyncState], None] | None = None,
    ) -> None:
        self._lookup = lookup
        self._flight_filter = flight_filter
        self._on_state_changed = on_state_changed
        self._loop: asyncio.AbstractEventLoop | None = None

        self._selection: Airport | None = None
        self._arrivals: tuple[FlightRecord, ...] = ()
        self._departures: tuple[FlightRecord, ...] = ()
        self._last_error: str | None = None
        self._epoch = 0
        self._tasks: set[asyncio.Task[None]] = set()

        self._unsubscribe: Callable[[], None] | None = None
        if channel is not None:
            self._unsubscribe = channel.subscribe(AirportSelectedMessage, self.on_external_selection_broadcast)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SyncController:
        self._loop = asyncio.get_running_loop()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cancel outstanding fetches and detach from the channel."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        # Invalidate anything that still manages to complete.
        self._epoch += 1
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()

    # ------------------------------------------------------------------
    # Observed state
    # ------------------------------------------------------------------

    @property
    def current_selection(self) -> Airport | None:
        return self._selection

    @property
    def arrivals(self) -> tuple[FlightRecord, ...]:
        return self._arrivals

    @property
    def departures(self) -> tuple[FlightRecord, ...]:
        return self._departures

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def is_fetching(self) -> bool:
        return any(not task.done() for task in self._tasks)

    @property
    def state(self) -> SyncState:
        return SyncState(
            current_selection=self._selection,
            arrivals=self._arrivals,
            departures=self._departures,
            last_error=self._last_error,
            epoch=self._epoch,
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_selection(self, airport: Airport | ConcreteSelection) -> bool:
        """Switch to *airport* and start fetching its flights.

        Returns ``False`` without doing anything when *airport* is already
        selected. Otherwise both lists are cleared before this returns and
        the fetch completes in the background.

        Raises
        ------
        ValueError
            If given the "nearest" request; it has to be resolved to a
            concrete airport first.
        """
        if isinstance(airport, NearestRequested):
            raise ValueError("nearest must be resolved to a concrete airport before selecting it")
        if isinstance(airport, ConcreteSelection):
            airport = airport.airport
        if airport == self._selection:
            return False

        loop = self._owner_loop()
        self._selection = airport
        self._epoch += 1
        epoch = self._epoch
        self._arrivals = ()
        self._departures = ()
        self._last_error = None
        self._notify()

        _logger.debug("Selection %s (epoch=%d): dispatching fetch", airport.code, epoch)
        task = loop.create_task(self._fetch(airport, epoch), name=f"flightsync-fetch-{airport.code}-{epoch}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    def on_external_selection_broadcast(self, message: AirportSelectedMessage | Airport) -> None:
        """Channel entry point; behaves exactly like :meth:`set_selection`."""
        airport = message.content if isinstance(message, AirportSelectedMessage) else message
        self.set_selection(airport)

    def post_selection(self, airport: Airport) -> None:
        """Thread-safe variant of :meth:`set_selection`.

        Marshals the call onto the owning loop, which must already be
        known (enter the controller with ``async with`` first).
        """
        if self._loop is None:
            raise RuntimeError("Controller not started. Use 'async with SyncController(...)' first")
        self._loop.call_soon_threadsafe(self.set_selection, airport)

    def restore(
        self,
        selection: Airport,
        arrivals: Iterable[FlightRecord],
        departures: Iterable[FlightRecord],
    ) -> None:
        """Rehydrate a suspended session without fetching.

        Any fetch still in flight is invalidated.
        """
        self._epoch += 1
        self._selection = selection
        self._arrivals = tuple(arrivals)
        self._departures = tuple(departures)
        self._last_error = None
        _logger.debug(
            "Restored %s (epoch=%d, %d arrivals, %d departures)",
            selection.code,
            self._epoch,
            len(self._arrivals),
            len(self._departures),
        )
        self._notify()

    async def wait_idle(self) -> None:
        """Wait until every dispatched fetch has finished."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))

    # ------------------------------------------------------------------
    # Fetch completion
    # ------------------------------------------------------------------

    def on_fetch_succeeded(self, records: Iterable[FlightRecord], *, epoch: int | None = None) -> bool:
        """Replace both lists with *records* partitioned by direction.

        Input order is kept within each list. Returns ``False`` when the
        result belongs to a superseded selection and was discarded.
        """
        if not self._is_current(epoch, "result"):
            return False
        flights = FlightSet.partition(records, self._flight_filter)
        self._arrivals = flights.arrivals
        self._departures = flights.departures
        _logger.debug(
            "Loaded %d arrivals, %d departures for %s",
            len(self._arrivals),
            len(self._departures),
            self._selection.code if self._selection else None,
        )
        self._notify()
        return True

    def on_fetch_failed(self, error: BaseException, *, epoch: int | None = None) -> bool:
        """Record *error* as the last error.

        The lists stay as cleared by :meth:`set_selection`; there is no
        rollback and no retry.
        """
        if not self._is_current(epoch, "failure"):
            return False
        self._last_error = str(error)
        _logger.debug("Fetch failed for %s: %s", self._selection.code if self._selection else None, error)
        self._notify()
        return True

    async def _fetch(self, airport: Airport, epoch: int) -> None:
        try:
            records = [record async for record in self._lookup.fetch_flights(airport)]
        except asyncio.CancelledError:
            raise
        except TransportError as exc:
            self.on_fetch_failed(exc, epoch=epoch)
        except Exception as exc:
            _logger.debug("Lookup for %s raised unexpectedly", airport.code, exc_info=True)
            self.on_fetch_failed(TransportError(str(exc), airport=airport.code), epoch=epoch)
        else:
            self.on_fetch_succeeded(records, epoch=epoch)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _owner_loop(self) -> asyncio.AbstractEventLoop:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        elif self._loop is not loop:
            raise RuntimeError("SyncController used from a different event loop than the one owning it")
        return loop

    def _is_current(self, epoch: int | None, what: str) -> bool:
        if epoch is None or epoch == self._epoch:
            return True
        _logger.debug("Discarding stale %s (epoch=%d, current=%d)", what, epoch, self._epoch)
        return False

    def _notify(self) -> None:
        if self._on_state_changed is None:
            return
        try:
            self._on_state_changed(self.state)
        except Exception:
            _logger.warning("on_state_changed callback failed", exc_info=True)
