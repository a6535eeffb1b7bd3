"""Session and durable stores.

``PersistentState`` and ``DurableStore`` are structural interfaces so the
host application can plug in its own platform storage; the concrete
classes here cover tests and plain processes.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator, MutableMapping
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from flightsync.config import SyncConfig
from flightsync.exceptions import NotFoundError, StateCorruptionError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistentState(Protocol):
    """Key/value snapshot store scoped to one app session."""

    def __contains__(self, key: object) -> bool:
        ...

    def __getitem__(self, key: str) -> Any:
        ...

    def __setitem__(self, key: str, value: Any) -> None:
        ...

    def __delitem__(self, key: str) -> None:
        ...


class DurableStore(Protocol):
    """File-keyed object store that survives process restarts."""

    def file_exists(self, name: str) -> bool:
        ...

    def load(self, name: str, adapter: TypeAdapter[T]) -> T:
        ...

    def save(self, name: str, value: T, adapter: TypeAdapter[T]) -> None:
        ...


class SessionState(MutableMapping[str, Any]):
    """In-memory session state.

    Writes replace whatever was stored under the key; nothing is merged.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"SessionState(keys={sorted(self._data)!r})"


class FileObjectStore:
    """JSON-on-disk object store rooted at a directory.

    Values are serialized with the pydantic ``TypeAdapter`` the caller
    passes, so the store itself knows nothing about the stored types.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = Path(root).expanduser()

    @classmethod
    def from_config(cls, config: SyncConfig) -> FileObjectStore:
        return cls(config.state_path)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path:
        if not name or Path(name).name != name:
            raise ValueError(f"invalid object name: {name!r}")
        return self._root / name

    def file_exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def load(self, name: str, adapter: TypeAdapter[T]) -> T:
        """Load and validate *name*.

        Raises
        ------
        NotFoundError
            If the file does not exist. Check ``file_exists`` first.
        StateCorruptionError
            If the file exists but does not validate against *adapter*.
        """
        path = self._path(name)
        try:
            payload = path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError(f"No stored object named {name!r} in {self._root}", name=name) from exc

        try:
            return adapter.validate_json(payload)
        except ValidationError as exc:
            raise StateCorruptionError(f"Stored object {name!r} is malformed: {exc}", key=name) from exc

    def save(self, name: str, value: T, adapter: TypeAdapter[T]) -> None:
        """Atomically replace *name* with the serialized *value*."""
        path = self._path(name)
        self._root.mkdir(parents=True, exist_ok=True)
        payload = adapter.dump_json(value, by_alias=True)

        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        _logger.debug("Saved %s (%d bytes)", path, len(payload))
