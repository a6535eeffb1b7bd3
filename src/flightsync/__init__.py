"""flightsync - Async selection-driven arrivals/departures synchronization."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("flightsync")
except PackageNotFoundError:
    __version__ = "0+local"
from flightsync.channel import SelectionChannel
from flightsync.config import SyncConfig
from flightsync.controller import SyncController
from flightsync.exceptions import (
    ConfigError,
    FlightSyncError,
    NotFoundError,
    StateCorruptionError,
    TransportError,
)
from flightsync.lifecycle import LifecycleBridge
from flightsync.lookup import FlightLookupService
from flightsync.models import (
    NEAREST,
    Airport,
    AirportSelectedMessage,
    ConcreteSelection,
    Direction,
    FindNearestAirportMessage,
    FlightRecord,
    FlightSet,
    NearestRequested,
    Selection,
    SyncState,
)
from flightsync.policy import build_flight_filter, max_age_filter
from flightsync.resolver import (
    DurableSelectionSource,
    PendingNearestResolution,
    RestoredSession,
    SavedSelection,
    SelectionResolver,
    SelectionSource,
    SessionSelectionSource,
)
from flightsync.state import FileObjectStore, SessionState

__all__ = [
    "__version__",
    "NEAREST",
    "Airport",
    "AirportSelectedMessage",
    "ConcreteSelection",
    "ConfigError",
    "Direction",
    "DurableSelectionSource",
    "FileObjectStore",
    "FindNearestAirportMessage",
    "FlightLookupService",
    "FlightRecord",
    "FlightSet",
    "FlightSyncError",
    "LifecycleBridge",
    "NearestRequested",
    "NotFoundError",
    "PendingNearestResolution",
    "RestoredSession",
    "SavedSelection",
    "Selection",
    "SelectionChannel",
    "SelectionResolver",
    "SelectionSource",
    "SessionSelectionSource",
    "SessionState",
    "StateCorruptionError",
    "SyncConfig",
    "SyncController",
    "SyncState",
    "TransportError",
    "build_flight_filter",
    "max_age_filter",
]
