"""Library configuration for flightsync."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from flightsync._constants import (
    DEFAULT_ARRIVAL_MAX_AGE_HOURS,
    DEFAULT_DEPARTURE_MAX_AGE_HOURS,
    DEFAULT_STATE_DIR,
    SELECTED_AIRPORT_FILENAME,
)
from flightsync.exceptions import ConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_hours(name: str, value: str) -> float:
    try:
        hours = float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number of hours, got {value!r}") from exc
    if hours < 0:
        raise ConfigError(f"{name} must not be negative, got {hours}")
    return hours


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Controller and storage configuration.

    Parameters
    ----------
    state_dir : str
        Directory backing the durable object store. ``~`` is expanded.
    selected_airport_filename : str
        File name of the saved selection inside *state_dir*.
    stale_filter_enabled : bool
        Drop flights whose scheduled time lies further in the past than
        the max-age window below. Off by default, in which case every
        fetched record is shown.
    arrival_max_age_hours : float
        Max age of an arrival before it is considered stale.
    departure_max_age_hours : float
        Max age of a departure before it is considered stale.
    """

    state_dir: str = DEFAULT_STATE_DIR
    selected_airport_filename: str = SELECTED_AIRPORT_FILENAME
    stale_filter_enabled: bool = False
    arrival_max_age_hours: float = DEFAULT_ARRIVAL_MAX_AGE_HOURS
    departure_max_age_hours: float = DEFAULT_DEPARTURE_MAX_AGE_HOURS

    def __post_init__(self) -> None:
        for field_name in ("arrival_max_age_hours", "departure_max_age_hours"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{field_name} must be a number of hours, got {value!r}")
            if value < 0:
                raise ConfigError(f"{field_name} must not be negative, got {value}")

        filename = self.selected_airport_filename
        if not filename or Path(filename).name != filename or filename in {".", ".."}:
            raise ConfigError(f"selected_airport_filename must be a plain file name, got {filename!r}")

    @property
    def state_path(self) -> Path:
        """Resolved durable store directory."""
        return Path(self.state_dir).expanduser()

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from ``FLIGHTSYNC_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        ConfigError
            When a value cannot be parsed or fails validation.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        state_dir = env.get("FLIGHTSYNC_STATE_DIR")
        if state_dir:
            config_kwargs["state_dir"] = state_dir

        filename = env.get("FLIGHTSYNC_SELECTED_AIRPORT_FILE")
        if filename:
            config_kwargs["selected_airport_filename"] = filename

        if "stale_filter_enabled" not in overrides:
            config_kwargs["stale_filter_enabled"] = _env_bool(env.get("FLIGHTSYNC_STALE_FILTER"), False)

        _ENV_HOURS_MAP = {
            "FLIGHTSYNC_ARRIVAL_MAX_AGE_HOURS": "arrival_max_age_hours",
            "FLIGHTSYNC_DEPARTURE_MAX_AGE_HOURS": "departure_max_age_hours",
        }
        for env_key, field_name in _ENV_HOURS_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_hours(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
