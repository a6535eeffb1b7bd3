"""Flight lookup contract consumed by the controller."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from flightsync.models import Airport, FlightRecord


@runtime_checkable
class FlightLookupService(Protocol):
    """Remote source of flights for an airport.

    ``fetch_flights`` yields records as they arrive. Implementations
    signal failure by raising :class:`~flightsync.exceptions.TransportError`
    from the iterator; anything else raised is wrapped into one by the
    controller.
    """

    def fetch_flights(self, airport: Airport) -> AsyncIterator[FlightRecord]:
        ...
