"""Process-wide teardown notifier backed by ``atexit``."""

import atexit
import logging
from typing import Callable

from ..domain.interfaces.teardown_notifier import TeardownNotifier

logger = logging.getLogger(__name__)


class ProcessTeardownNotifier(TeardownNotifier):
    """Runs registered callbacks once when the interpreter exits.

    The ``atexit`` hook is installed once, on construction. Callbacks can
    be unregistered, so per-connection callbacks do not pile up.
    """

    def __init__(self):
        self._callbacks: list[Callable[[], None]] = []
        self._fired = False
        atexit.register(self.fire)

    def register(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def unregister(self, callback: Callable[[], None]) -> None:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            logger.debug("Teardown callback was not registered")

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True
        logger.info(f"Process teardown, flushing {len(self._callbacks)} callbacks")

        for callback in list(self._callbacks):
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in teardown callback: {e}", exc_info=True)

    def close(self) -> None:
        """Uninstall the ``atexit`` hook without firing."""
        atexit.unregister(self.fire)
