"""Startup selection resolution.

The effective selection is decided by asking an ordered chain of
:class:`SelectionSource` tiers; the first tier with an answer wins:

1. session state (a complete snapshot from the last suspend),
2. the durable saved selection,
3. nothing: wait for an explicit choice.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from flightsync._constants import SELECTED_AIRPORT_FILENAME
from flightsync.channel import SelectionChannel
from flightsync.config import SyncConfig
from flightsync.exceptions import NotFoundError, StateCorruptionError
from flightsync.models import (
    SELECTION_ADAPTER,
    Airport,
    ConcreteSelection,
    FindNearestAirportMessage,
    NearestRequested,
    Selection,
)
from flightsync.state.snapshot import SessionSnapshot, read_session_snapshot
from flightsync.state.store import DurableStore, FileObjectStore, PersistentState

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RestoredSession:
    """The session tier held a complete snapshot."""

    snapshot: SessionSnapshot

    @property
    def airport(self) -> Airport:
        return self.snapshot.selection


@dataclass(frozen=True, slots=True)
class SavedSelection:
    """The durable tier held a concrete airport."""

    airport: Airport


@dataclass(frozen=True, slots=True)
class PendingNearestResolution:
    """The saved choice is "nearest"; an out-of-band lookup must answer."""


Resolution = RestoredSession | SavedSelection | PendingNearestResolution


class SelectionSource(Protocol):
    """One tier of the resolution chain.

    ``resolve`` returns ``None`` to pass to the next tier.
    """

    def resolve(self) -> Resolution | None:
        ...


class SessionSelectionSource:
    """Session tier: answers only with a complete, well-formed snapshot."""

    def __init__(self, state: PersistentState) -> None:
        self._state = state

    def resolve(self) -> Resolution | None:
        try:
            snapshot = read_session_snapshot(self._state)
        except StateCorruptionError as exc:
            _logger.warning("Ignoring session snapshot: %s", exc)
            return None
        if snapshot is None:
            return None
        return RestoredSession(snapshot)


class DurableSelectionSource:
    """Durable tier: the selection the user saved in an earlier run."""

    def __init__(self, store: DurableStore, filename: str = SELECTED_AIRPORT_FILENAME) -> None:
        self._store = store
        self._filename = filename

    def resolve(self) -> Resolution | None:
        if not self._store.file_exists(self._filename):
            return None
        try:
            saved = self._store.load(self._filename, SELECTION_ADAPTER)
        except NotFoundError:
            _logger.debug("Saved selection %s disappeared before it could be loaded", self._filename)
            return None
        except StateCorruptionError as exc:
            _logger.warning("Ignoring saved selection: %s", exc)
            return None
        if isinstance(saved, NearestRequested):
            return PendingNearestResolution()
        return SavedSelection(saved.airport)

    def save(self, selection: Selection) -> None:
        self._store.save(self._filename, selection, SELECTION_ADAPTER)


class SelectionResolver:
    """Picks the initial selection from the configured tiers.

    Parameters
    ----------
    sources
        Tiers in priority order.
    channel
        Where ``FindNearestAirportMessage`` is published when the winning
        answer is "nearest". Without a channel the request is only logged.
    durable
        Tier that ``remember`` writes to. Defaults to the first
        :class:`DurableSelectionSource` in *sources*.
    """

    def __init__(
        self,
        sources: Sequence[SelectionSource],
        *,
        channel: SelectionChannel | None = None,
        durable: DurableSelectionSource | None = None,
    ) -> None:
        self._sources = tuple(sources)
        self._channel = channel
        if durable is None:
            durable = next((s for s in self._sources if isinstance(s, DurableSelectionSource)), None)
        self._durable = durable

    @classmethod
    def from_stores(
        cls,
        session_state: PersistentState,
        durable_store: DurableStore,
        *,
        channel: SelectionChannel | None = None,
        filename: str = SELECTED_AIRPORT_FILENAME,
    ) -> SelectionResolver:
        """Standard two-tier chain: session state, then durable store."""
        return cls(
            [SessionSelectionSource(session_state), DurableSelectionSource(durable_store, filename)],
            channel=channel,
        )

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        session_state: PersistentState,
        *,
        channel: SelectionChannel | None = None,
    ) -> SelectionResolver:
        """Two-tier chain backed by a :class:`FileObjectStore` under ``config.state_dir``."""
        return cls.from_stores(
            session_state,
            FileObjectStore.from_config(config),
            channel=channel,
            filename=config.selected_airport_filename,
        )

    def resolve(self) -> Resolution | None:
        """Run the chain and return the winning tier's answer.

        A "nearest" answer also publishes ``FindNearestAirportMessage``.
        """
        for source in self._sources:
            resolution = source.resolve()
            if resolution is None:
                continue
            _logger.debug("Selection resolved by %s: %s", type(source).__name__, resolution)
            if isinstance(resolution, PendingNearestResolution):
                self._request_nearest()
            return resolution
        _logger.debug("No saved selection; waiting for an explicit choice")
        return None

    def resolve_initial_selection(self) -> Airport | PendingNearestResolution | None:
        resolution = self.resolve()
        if isinstance(resolution, (RestoredSession, SavedSelection)):
            return resolution.airport
        return resolution

    def remember(self, selection: Selection | Airport) -> None:
        """Persist the user's choice so the next cold start resolves to it."""
        if self._durable is None:
            raise RuntimeError("No durable selection source configured")
        if isinstance(selection, Airport):
            selection = ConcreteSelection(airport=selection)
        self._durable.save(selection)

    def _request_nearest(self) -> None:
        if self._channel is None:
            _logger.warning("Nearest airport requested but no channel is attached")
            return
        self._channel.publish(FindNearestAirportMessage())
