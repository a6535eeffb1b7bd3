"""Data models for flightsync."""

from flightsync.models._base import FlightSyncBaseModel, UtcDatetime
from flightsync.models.airport import Airport
from flightsync.models.flight import (
    FLIGHT_LIST_ADAPTER,
    BatchFlightFilter,
    Direction,
    FlightFilter,
    FlightRecord,
    FlightSet,
)
from flightsync.models.messages import AirportSelectedMessage, FindNearestAirportMessage
from flightsync.models.selection import (
    NEAREST,
    SELECTION_ADAPTER,
    ConcreteSelection,
    NearestRequested,
    Selection,
    select,
)
from flightsync.models.state import SyncState

__all__ = [
    "FLIGHT_LIST_ADAPTER",
    "NEAREST",
    "SELECTION_ADAPTER",
    "Airport",
    "BatchFlightFilter",
    "AirportSelectedMessage",
    "ConcreteSelection",
    "Direction",
    "FindNearestAirportMessage",
    "FlightFilter",
    "FlightRecord",
    "FlightSet",
    "FlightSyncBaseModel",
    "NearestRequested",
    "Selection",
    "SyncState",
    "UtcDatetime",
    "select",
]
