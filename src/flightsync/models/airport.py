"""Airport identity value."""

from __future__ import annotations

from pydantic import field_validator

from flightsync.models._base import FlightSyncBaseModel


class Airport(FlightSyncBaseModel):
    """A concrete airport, identified by its IATA code.

    Equality and hashing use the code only; ``name`` is display data, so
    ``Airport(code="OSL")`` and ``Airport(code="osl", name="Oslo")`` are
    the same selection.
    """

    code: str
    name: str = ""

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        code = value.strip().upper()
        if not code:
            raise ValueError("airport code must be non-empty")
        return code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Airport):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return f"{self.code} ({self.name})" if self.name else self.code
