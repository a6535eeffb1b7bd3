"""Stale-flight policy.

Flights whose scheduled time lies further in the past than a per-direction
window can be hidden. The policy is off unless enabled in
:class:`~flightsync.config.SyncConfig`; when off every record is kept.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from flightsync.config import SyncConfig
from flightsync.models import Direction, FlightFilter, FlightRecord


def _utcnow() -> datetime:
    return datetime.now(UTC)


def hours_since(record: FlightRecord, now: datetime) -> float:
    """Hours elapsed since *record* was scheduled (negative for future flights)."""
    return (now - record.scheduled_time).total_seconds() / 3600.0


class MaxAgeFilter:
    """Keeps flights scheduled within their direction's max-age window.

    ``FlightSet.partition`` calls :meth:`bind` once per batch, so every
    record of a fetch is measured against a single clock reading. Calling
    the filter directly reads the clock per record.
    """

    def __init__(
        self,
        *,
        arrival_max_age: timedelta,
        departure_max_age: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._limits = {
            Direction.ARRIVAL: arrival_max_age.total_seconds() / 3600.0,
            Direction.DEPARTURE: departure_max_age.total_seconds() / 3600.0,
        }
        self._clock = clock

    def bind(self) -> FlightFilter:
        now = self._clock()
        limits = self._limits

        def _keep(record: FlightRecord) -> bool:
            return hours_since(record, now) <= limits[record.direction]

        return _keep

    def __call__(self, record: FlightRecord) -> bool:
        return self.bind()(record)


def max_age_filter(
    *,
    arrival_max_age: timedelta,
    departure_max_age: timedelta,
    clock: Callable[[], datetime] = _utcnow,
) -> MaxAgeFilter:
    """Build a filter keeping flights scheduled within their max-age window."""
    return MaxAgeFilter(arrival_max_age=arrival_max_age, departure_max_age=departure_max_age, clock=clock)


def build_flight_filter(
    config: SyncConfig,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> MaxAgeFilter | None:
    """Return the configured filter, or ``None`` when the policy is disabled."""
    if not config.stale_filter_enabled:
        return None
    return max_age_filter(
        arrival_max_age=timedelta(hours=config.arrival_max_age_hours),
        departure_max_age=timedelta(hours=config.departure_max_age_hours),
        clock=clock,
    )
