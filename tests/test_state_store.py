from __future__ import annotations

import pytest

from flightsync.config import SyncConfig
from flightsync.exceptions import NotFoundError, StateCorruptionError
from flightsync.models import FLIGHT_LIST_ADAPTER, NEAREST, SELECTION_ADAPTER, Airport, select
from flightsync.state import (
    FileObjectStore,
    SessionState,
    clear_session_snapshot,
    read_session_snapshot,
    write_session_snapshot,
)


def test_file_store_checks_existence_before_load(tmp_path) -> None:
    store = FileObjectStore(tmp_path / "nested")

    assert store.file_exists("selected_airport.json") is False
    with pytest.raises(NotFoundError) as exc_info:
        store.load("selected_airport.json", SELECTION_ADAPTER)
    assert exc_info.value.name == "selected_airport.json"


def test_file_store_save_and_load(tmp_path, flight) -> None:
    store = FileObjectStore(tmp_path)

    store.save("selection.json", select(Airport(code="OSL", name="Oslo")), SELECTION_ADAPTER)
    store.save("flights.json", [flight(1), flight(2)], FLIGHT_LIST_ADAPTER)

    assert store.load("selection.json", SELECTION_ADAPTER) == select(Airport(code="OSL", name="Oslo"))
    assert [f.identifier for f in store.load("flights.json", FLIGHT_LIST_ADAPTER)] == ["1", "2"]
    # No temp files left behind.
    assert sorted(p.name for p in tmp_path.iterdir()) == ["flights.json", "selection.json"]


def test_file_store_overwrites(tmp_path) -> None:
    store = FileObjectStore(tmp_path)
    store.save("selection.json", select(Airport(code="OSL")), SELECTION_ADAPTER)
    store.save("selection.json", NEAREST, SELECTION_ADAPTER)

    assert store.load("selection.json", SELECTION_ADAPTER) == NEAREST


def test_file_store_reports_corrupt_file(tmp_path) -> None:
    (tmp_path / "selection.json").write_text("not json")

    with pytest.raises(StateCorruptionError):
        FileObjectStore(tmp_path).load("selection.json", SELECTION_ADAPTER)


def test_file_store_rejects_path_names(tmp_path) -> None:
    store = FileObjectStore(tmp_path)
    with pytest.raises(ValueError):
        store.file_exists("../escape.json")


def test_file_store_from_config(tmp_path) -> None:
    store = FileObjectStore.from_config(SyncConfig(state_dir=str(tmp_path)))
    assert store.root == tmp_path


def test_session_snapshot_roundtrip(flight) -> None:
    state = SessionState()
    write_session_snapshot(state, Airport(code="OSL"), [flight(1)], [flight(2)])

    snapshot = read_session_snapshot(state)

    assert snapshot is not None
    assert snapshot.selection == Airport(code="OSL")
    assert [f.identifier for f in snapshot.arrivals] == ["1"]
    assert [f.identifier for f in snapshot.departures] == ["2"]


def test_session_snapshot_absent_is_none() -> None:
    assert read_session_snapshot(SessionState()) is None


def test_session_snapshot_partial_raises(flight) -> None:
    state = SessionState({"Arrivals": [flight(1)], "Departures": []})

    with pytest.raises(StateCorruptionError) as exc_info:
        read_session_snapshot(state)
    assert exc_info.value.key == "SelectedAirport"


def test_clear_session_snapshot_only_touches_snapshot_keys(flight) -> None:
    state = SessionState({"Other": 1})
    write_session_snapshot(state, Airport(code="OSL"), [flight(1)], [])

    clear_session_snapshot(state)

    assert dict(state) == {"Other": 1}
