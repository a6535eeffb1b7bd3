"""Messages carried on the selection channel."""

from __future__ import annotations

from flightsync.models._base import FlightSyncBaseModel
from flightsync.models.airport import Airport


class AirportSelectedMessage(FlightSyncBaseModel):
    """Inbound: another component picked an airport (including a resolved "nearest")."""

    content: Airport


class FindNearestAirportMessage(FlightSyncBaseModel):
    """Outbound: ask whoever owns geolocation to resolve the nearest airport.

    The answer comes back as an :class:`AirportSelectedMessage`.
    """
