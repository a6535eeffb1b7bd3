"""State/store layer.

Session state survives a suspend/resume cycle, durable state survives a
full restart. The controller never talks to either directly; the
lifecycle bridge and the selection sources do.
"""

from flightsync.state.snapshot import SessionSnapshot, clear_session_snapshot, read_session_snapshot, write_session_snapshot
from flightsync.state.store import DurableStore, FileObjectStore, PersistentState, SessionState

__all__ = [
    "DurableStore",
    "FileObjectStore",
    "PersistentState",
    "SessionSnapshot",
    "SessionState",
    "clear_session_snapshot",
    "read_session_snapshot",
    "write_session_snapshot",
]
