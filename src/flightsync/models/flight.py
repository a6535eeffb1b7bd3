"""Flight records and the arrivals/departures partition."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Annotated, Protocol, runtime_checkable

from pydantic import BeforeValidator, Field, TypeAdapter

from flightsync.models._base import FlightSyncBaseModel, UtcDatetime, blank_to_none


class Direction(StrEnum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"

    @classmethod
    def _missing_(cls, value: object) -> Direction | None:
        # Feeds use "A"/"D" or capitalised names.
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if normalized in (member.value, member.value[0]):
                    return member
        return None


OptionalStr = Annotated[str | None, BeforeValidator(blank_to_none)]


class FlightRecord(FlightSyncBaseModel):
    """A single scheduled flight as produced by the lookup service."""

    identifier: str
    scheduled_time: UtcDatetime
    direction: Direction
    flight_id: OptionalStr = None
    airline: OptionalStr = None
    airport: OptionalStr = Field(default=None, description="Origin for arrivals, destination for departures")
    status: OptionalStr = None
    gate: OptionalStr = None

    @property
    def is_arrival(self) -> bool:
        return self.direction is Direction.ARRIVAL


FLIGHT_LIST_ADAPTER: TypeAdapter[list[FlightRecord]] = TypeAdapter(list[FlightRecord])

FlightFilter = Callable[[FlightRecord], bool]


@runtime_checkable
class BatchFlightFilter(Protocol):
    """A filter that fixes its inputs (such as the current time) once per batch."""

    def __call__(self, record: FlightRecord) -> bool:
        ...

    def bind(self) -> FlightFilter:
        ...


class FlightSet(FlightSyncBaseModel):
    """Arrivals and departures in the order the lookup produced them."""

    arrivals: tuple[FlightRecord, ...] = ()
    departures: tuple[FlightRecord, ...] = ()

    @classmethod
    def partition(
        cls,
        records: Iterable[FlightRecord],
        flight_filter: FlightFilter | None = None,
    ) -> FlightSet:
        """Stable partition of *records* by direction.

        Records are never sorted. When *flight_filter* is given, records
        for which it returns ``False`` are dropped. A :class:`BatchFlightFilter`
        is bound once, so the whole batch is judged against the same inputs.
        """
        keep = flight_filter.bind() if isinstance(flight_filter, BatchFlightFilter) else flight_filter
        arrivals: list[FlightRecord] = []
        departures: list[FlightRecord] = []
        for record in records:
            if keep is not None and not keep(record):
                continue
            if record.is_arrival:
                arrivals.append(record)
            else:
                departures.append(record)
        return cls(arrivals=tuple(arrivals), departures=tuple(departures))
