"""Custom exception hierarchy for flightsync."""

from __future__ import annotations


class FlightSyncError(Exception):
    """Base exception for all flightsync errors."""


class ConfigError(FlightSyncError):
    """Invalid or missing configuration."""


class NotFoundError(FlightSyncError):
    """A durable record was requested but does not exist.

    Callers are expected to check ``file_exists`` before loading, so this
    only surfaces on a logic error, never on ordinary absence.
    """

    def __init__(self, message: str, *, name: str = "") -> None:
        self.name = name
        super().__init__(message)


class TransportError(FlightSyncError):
    """Flight lookup failed (network, non-200, malformed feed)."""

    def __init__(
        self,
        message: str,
        *,
        airport: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.airport = airport
        self.status_code = status_code
        super().__init__(message)


class StateCorruptionError(FlightSyncError):
    """Session state holds a partial or malformed snapshot.

    Raised by the snapshot reader and caught by the session selection
    source, which treats the snapshot as absent.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)
