"""Typed publish/subscribe channel for selection messages.

Components receive the channel at construction instead of reaching for a
process-wide messenger. Delivery is synchronous, in subscription order,
on the publisher's thread; use ``SyncController.post_selection`` to hand
a selection over from another thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Handler = Callable[[Any], None]


class SelectionChannel:
    """Routes messages to handlers registered for their exact type."""

    def __init__(self) -> None:
        self._handlers: dict[type[BaseModel], list[Handler]] = {}

    def subscribe(self, message_type: type[M], handler: Callable[[M], None]) -> Callable[[], None]:
        """Register *handler* for *message_type*.

        Returns a callable that removes the registration; calling it twice
        is harmless.
        """
        handlers = self._handlers.setdefault(message_type, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            try:
                handlers.remove(handler)
            except ValueError:
                pass

        return _unsubscribe

    def publish(self, message: BaseModel) -> int:
        """Deliver *message* to every handler of its type.

        A failing handler is logged and does not stop delivery to the
        others. Returns the number of handlers invoked.
        """
        handlers = list(self._handlers.get(type(message), ()))
        if not handlers:
            _logger.debug("No subscribers for %s", type(message).__name__)
        for handler in handlers:
            try:
                handler(message)
            except Exception:
                _logger.warning("Handler for %s failed", type(message).__name__, exc_info=True)
        return len(handlers)

    def subscriber_count(self, message_type: type[BaseModel]) -> int:
        return len(self._handlers.get(message_type, ()))
