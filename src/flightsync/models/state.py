"""Observable controller state."""

from __future__ import annotations

from flightsync.models._base import FlightSyncBaseModel
from flightsync.models.airport import Airport
from flightsync.models.flight import FlightRecord


class SyncState(FlightSyncBaseModel):
    """Immutable snapshot of what the controller currently shows."""

    current_selection: Airport | None = None
    arrivals: tuple[FlightRecord, ...] = ()
    departures: tuple[FlightRecord, ...] = ()
    last_error: str | None = None
    epoch: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.arrivals and not self.departures
