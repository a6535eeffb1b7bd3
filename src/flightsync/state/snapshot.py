"""Session snapshot of the controller: selection plus both result lists.

The three keys are written together and are only ever read back
together. A snapshot missing any key, or holding a value that does not
validate, is reported as :class:`StateCorruptionError` when partially
present and as ``None`` when wholly absent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from flightsync._constants import ARRIVALS_KEY, DEPARTURES_KEY, SELECTED_AIRPORT_KEY, SESSION_KEYS
from flightsync.exceptions import StateCorruptionError
from flightsync.models import FLIGHT_LIST_ADAPTER, Airport, FlightRecord, FlightSyncBaseModel
from flightsync.state.store import PersistentState

_logger = logging.getLogger(__name__)

_AIRPORT_ADAPTER: TypeAdapter[Airport] = TypeAdapter(Airport)


class SessionSnapshot(FlightSyncBaseModel):
    """Complete session triple."""

    selection: Airport
    arrivals: tuple[FlightRecord, ...] = ()
    departures: tuple[FlightRecord, ...] = ()


def write_session_snapshot(
    state: PersistentState,
    selection: Airport,
    arrivals: Sequence[FlightRecord],
    departures: Sequence[FlightRecord],
) -> None:
    """Store the triple, overwriting any previous snapshot."""
    state[ARRIVALS_KEY] = list(arrivals)
    state[DEPARTURES_KEY] = list(departures)
    state[SELECTED_AIRPORT_KEY] = selection


def clear_session_snapshot(state: PersistentState) -> None:
    for key in SESSION_KEYS:
        if key in state:
            del state[key]


def read_session_snapshot(state: PersistentState) -> SessionSnapshot | None:
    """Read the triple back.

    Returns ``None`` when none of the keys are present.

    Raises
    ------
    StateCorruptionError
        When only some of the keys are present or a value is malformed.
    """
    present = [key for key in SESSION_KEYS if key in state]
    if not present:
        return None
    if len(present) != len(SESSION_KEYS):
        missing = sorted(set(SESSION_KEYS) - set(present))
        raise StateCorruptionError(
            f"Incomplete session snapshot, missing {', '.join(missing)}",
            key=missing[0],
        )

    try:
        selection = _AIRPORT_ADAPTER.validate_python(state[SELECTED_AIRPORT_KEY])
    except ValidationError as exc:
        raise StateCorruptionError(f"Malformed {SELECTED_AIRPORT_KEY}: {exc}", key=SELECTED_AIRPORT_KEY) from exc

    lists: dict[str, list[FlightRecord]] = {}
    for key in (ARRIVALS_KEY, DEPARTURES_KEY):
        try:
            lists[key] = FLIGHT_LIST_ADAPTER.validate_python(state[key])
        except ValidationError as exc:
            raise StateCorruptionError(f"Malformed {key}: {exc}", key=key) from exc

    _logger.debug(
        "Read session snapshot for %s (%d arrivals, %d departures)",
        selection.code,
        len(lists[ARRIVALS_KEY]),
        len(lists[DEPARTURES_KEY]),
    )
    return SessionSnapshot(
        selection=selection,
        arrivals=tuple(lists[ARRIVALS_KEY]),
        departures=tuple(lists[DEPARTURES_KEY]),
    )
