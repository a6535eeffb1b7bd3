"""Suspend/resume glue between the controller and the session stores."""

from __future__ import annotations

import logging

from flightsync.controller import SyncController
from flightsync.resolver import (
    PendingNearestResolution,
    Resolution,
    RestoredSession,
    SavedSelection,
    SelectionResolver,
)
from flightsync.state.snapshot import clear_session_snapshot, write_session_snapshot
from flightsync.state.store import PersistentState

_logger = logging.getLogger(__name__)


class LifecycleBridge:
    """Saves controller state on suspend and rehydrates it on resume.

    The host wires its platform hooks (deactivated/activated, SIGTSTP,
    page hide/show...) to :meth:`on_suspend` and :meth:`on_resume`.
    """

    def __init__(
        self,
        controller: SyncController,
        session_state: PersistentState,
        resolver: SelectionResolver,
    ) -> None:
        self._controller = controller
        self._session_state = session_state
        self._resolver = resolver

    def on_suspend(self) -> None:
        """Snapshot selection and both lists, replacing any older snapshot."""
        selection = self._controller.current_selection
        if selection is None:
            # Nothing to restore; make sure an older triple cannot come back.
            clear_session_snapshot(self._session_state)
            _logger.debug("Suspend with no selection; cleared session snapshot")
            return
        write_session_snapshot(
            self._session_state,
            selection,
            self._controller.arrivals,
            self._controller.departures,
        )
        _logger.debug("Suspend: saved snapshot for %s", selection.code)

    def on_resume(self) -> Resolution | None:
        """Re-hydrate the controller from the first tier that has an answer.

        A complete session snapshot is restored as-is without refetching.
        A saved concrete airport is selected, which starts a fetch, so this
        must run on the controller's event loop. A saved "nearest" leaves
        the selection unset until an ``AirportSelectedMessage`` arrives.
        """
        resolution = self._resolver.resolve()
        if isinstance(resolution, RestoredSession):
            snapshot = resolution.snapshot
            self._controller.restore(snapshot.selection, snapshot.arrivals, snapshot.departures)
        elif isinstance(resolution, SavedSelection):
            self._controller.set_selection(resolution.airport)
        elif isinstance(resolution, PendingNearestResolution):
            _logger.debug("Resume: waiting for nearest airport")
        return resolution
