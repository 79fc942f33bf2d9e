"""Teardown notifier for a single client connection."""

import logging
from typing import Callable

from ..domain.interfaces.teardown_notifier import TeardownNotifier

logger = logging.getLogger(__name__)


class ConnectionTeardownNotifier(TeardownNotifier):
    """Fired by the WebSocket layer when a client connection closes.

    Firing is idempotent: callbacks run at most once.
    """

    def __init__(self):
        self._callbacks: list[Callable[[], None]] = []
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def register(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True

        for callback in self._callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in teardown callback: {e}", exc_info=True)
