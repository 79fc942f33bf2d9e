"""
Fire-and-forget HTTP delivery for teardown flushes.

- ``send()`` never blocks: payloads go to a bounded in-memory queue.
- A daemon worker thread posts them with a synchronous httpx client.
- Responses are not inspected beyond logging; there are no retries.
"""

from __future__ import annotations

import atexit
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Beacon:
    url: str
    body: bytes
    content_type: str = "application/json"


_STOP = object()


class BeaconSender:
    def __init__(
        self,
        timeout_seconds: float = 5.0,
        max_pending: int = 100,
        client: Optional[httpx.Client] = None,
    ):
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._queue: queue.Queue = queue.Queue(maxsize=max_pending)
        self._lock = threading.Lock()
        self._closed = False
        # Started eagerly: threads cannot be started during interpreter shutdown
        self._worker = threading.Thread(target=self._run, name="beacon-sender", daemon=True)
        self._worker.start()
        # Runs after teardown callbacks registered later, since atexit is LIFO
        atexit.register(self.close)

    # -------- public API --------
    def send(self, url: str, body: bytes, content_type: str = "application/json") -> bool:
        """Queue a beacon. Returns False when it could not be accepted."""
        with self._lock:
            if self._closed:
                logger.warning(f"Beacon sender closed, dropping beacon to {url}")
                return False
            try:
                self._queue.put_nowait(Beacon(url, body, content_type))
            except queue.Full:
                logger.warning(f"Beacon queue full, dropping beacon to {url}")
                return False
        return True

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self, timeout: float = 5.0) -> None:
        """Deliver what is queued, then stop the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        # Blocks only if the queue is full; the worker keeps draining it
        self._queue.put(_STOP)
        self._worker.join(timeout)
        if self._worker.is_alive():
            logger.warning(f"Beacon sender did not finish within {timeout}s, {self.pending()} beacons pending")
            return
        self._client.close()

    # -------- worker --------
    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            self._deliver(item)

    def _deliver(self, beacon: Beacon) -> None:
        try:
            response = self._client.post(
                beacon.url,
                content=beacon.body,
                headers={"Content-Type": beacon.content_type},
            )
            logger.debug(f"Beacon to {beacon.url} answered {response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Beacon to {beacon.url} failed: {e}")
