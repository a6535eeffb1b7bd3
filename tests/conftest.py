"""Shared fakes for flightsync tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime, timedelta

import pytest

from flightsync.models import Airport, Direction, FlightRecord

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def make_flight(
    identifier: str | int,
    direction: Direction = Direction.ARRIVAL,
    *,
    minutes_ago: float = 0,
) -> FlightRecord:
    return FlightRecord(
        identifier=str(identifier),
        scheduled_time=NOW - timedelta(minutes=minutes_ago),
        direction=direction,
    )


class FakeLookup:
    """Scriptable lookup: canned records or errors per airport, optionally held behind a gate."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._outcomes: dict[str, list[FlightRecord] | BaseException] = {}
        self._gates: dict[str, asyncio.Event] = {}
        self._finished: dict[str, asyncio.Event] = {}

    def respond(self, code: str, records: list[FlightRecord]) -> None:
        self._outcomes[code] = records

    def fail(self, code: str, error: BaseException) -> None:
        self._outcomes[code] = error

    def hold(self, code: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[code] = gate
        return gate

    def finished(self, code: str) -> asyncio.Event:
        return self._finished.setdefault(code, asyncio.Event())

    async def fetch_flights(self, airport: Airport) -> AsyncIterator[FlightRecord]:
        self.calls.append(airport.code)
        try:
            gate = self._gates.get(airport.code)
            if gate is not None:
                await gate.wait()
            outcome = self._outcomes.get(airport.code, [])
            if isinstance(outcome, BaseException):
                raise outcome
            for record in outcome:
                yield record
        finally:
            self.finished(airport.code).set()


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture
def flight() -> Callable[..., FlightRecord]:
    return make_flight


@pytest.fixture
def osl() -> Airport:
    return Airport(code="OSL", name="Oslo Gardermoen")


@pytest.fixture
def bgo() -> Airport:
    return Airport(code="BGO", name="Bergen Flesland")


@pytest.fixture
def now() -> datetime:
    return NOW
