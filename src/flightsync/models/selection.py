"""User selection: a concrete airport or a request to use the nearest one.

The "nearest" choice is a meta-instruction, not an airport, so it lives
in its own variant of a tagged union instead of reusing :class:`Airport`.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from flightsync.models._base import FlightSyncBaseModel
from flightsync.models.airport import Airport


class ConcreteSelection(FlightSyncBaseModel):
    kind: Literal["airport"] = "airport"
    airport: Airport


class NearestRequested(FlightSyncBaseModel):
    """Resolve the airport dynamically (geolocation or another out-of-band lookup)."""

    kind: Literal["nearest"] = "nearest"


Selection = Annotated[ConcreteSelection | NearestRequested, Field(discriminator="kind")]

SELECTION_ADAPTER: TypeAdapter[ConcreteSelection | NearestRequested] = TypeAdapter(Selection)

NEAREST = NearestRequested()


def select(airport: Airport) -> ConcreteSelection:
    """Wrap *airport* as a concrete selection."""
    return ConcreteSelection(airport=airport)
