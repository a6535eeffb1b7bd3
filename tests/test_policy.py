from __future__ import annotations

from datetime import datetime, timedelta

from flightsync.config import SyncConfig
from flightsync.models import BatchFlightFilter, Direction, FlightSet
from flightsync.policy import build_flight_filter, hours_since, max_age_filter


def test_filter_disabled_by_default() -> None:
    assert build_flight_filter(SyncConfig()) is None


def test_hours_since_is_negative_for_future_flights(flight, now) -> None:
    assert hours_since(flight(1, minutes_ago=90), now) == 1.5
    assert hours_since(flight(1, minutes_ago=-30), now) == -0.5


def test_max_age_windows_per_direction(flight, now) -> None:
    keep = max_age_filter(
        arrival_max_age=timedelta(hours=1),
        departure_max_age=timedelta(minutes=15),
        clock=lambda: now,
    )
    records = [
        flight("arr-recent", Direction.ARRIVAL, minutes_ago=59),
        flight("arr-old", Direction.ARRIVAL, minutes_ago=61),
        flight("dep-recent", Direction.DEPARTURE, minutes_ago=10),
        flight("dep-old", Direction.DEPARTURE, minutes_ago=20),
        flight("dep-future", Direction.DEPARTURE, minutes_ago=-120),
    ]

    flights = FlightSet.partition(records, keep)

    assert [f.identifier for f in flights.arrivals] == ["arr-recent"]
    assert [f.identifier for f in flights.departures] == ["dep-recent", "dep-future"]


def test_enabled_config_builds_filter(flight, now) -> None:
    keep = build_flight_filter(SyncConfig(stale_filter_enabled=True), clock=lambda: now)

    assert keep is not None
    assert keep(flight(1, Direction.ARRIVAL, minutes_ago=30)) is True
    assert keep(flight(2, Direction.DEPARTURE, minutes_ago=30)) is False


def test_clock_is_read_once_per_partition(flight, now) -> None:
    readings: list[datetime] = []

    def clock() -> datetime:
        readings.append(now)
        return now

    keep = max_age_filter(arrival_max_age=timedelta(hours=1), departure_max_age=timedelta(minutes=15), clock=clock)
    records = [
        flight(1, Direction.ARRIVAL, minutes_ago=5),
        flight(2, Direction.DEPARTURE, minutes_ago=5),
        flight(3, Direction.ARRIVAL, minutes_ago=120),
    ]

    assert isinstance(keep, BatchFlightFilter)
    flights = FlightSet.partition(records, keep)

    assert len(readings) == 1
    assert [f.identifier for f in flights.arrivals] == ["1"]
    assert [f.identifier for f in flights.departures] == ["2"]


def test_batch_is_judged_against_one_instant(flight, now) -> None:
    # Each reading moves the clock forward by 30 minutes.
    ticks = iter(now + timedelta(minutes=30 * i) for i in range(10))
    keep = max_age_filter(
        arrival_max_age=timedelta(hours=1),
        departure_max_age=timedelta(hours=1),
        clock=lambda: next(ticks),
    )
    records = [flight(i, Direction.ARRIVAL, minutes_ago=50) for i in range(3)]

    flights = FlightSet.partition(records, keep)

    assert [f.identifier for f in flights.arrivals] == ["0", "1", "2"]
