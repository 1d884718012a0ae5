import queue
import threading
from typing import Optional

import requests

from .types import USER_AGENT, FailureRecord


class SessionFactory:
    def __init__(self):
        self.local = threading.local()

    def get(self) -> requests.Session:
        session = getattr(self.local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT})
            self.local.session = session
        return session


class Counters:
    """Run-wide tallies shared by every worker."""

    def __init__(self):
        self.lock = threading.Lock()
        self.processed = 0
        self.existing = 0
        self.downloaded = 0
        self.failed = 0

    def add(self, name: str, amount: int = 1) -> None:
        with self.lock:
            setattr(self, name, getattr(self, name) + amount)

    def snapshot(self) -> dict[str, int]:
        with self.lock:
            return {
                "processed": self.processed,
                "existing": self.existing,
                "downloaded": self.downloaded,
                "failed": self.failed,
            }


_STOP = object()


class FailureCollector:
    """Single consumer of the failure queue.

    Workers only ever ``report``; the collector thread is the sole owner of
    the accumulated list until ``stop`` hands it back.
    """

    def __init__(self, failures: Optional[queue.Queue] = None):
        self.queue: queue.Queue = failures if failures is not None else queue.Queue()
        self.records: list[FailureRecord] = []
        self.thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self.thread is not None:
            raise RuntimeError("failure collector already started")
        self.thread = threading.Thread(target=self._consume, name="failure-collector", daemon=True)
        self.thread.start()

    def report(self, record: FailureRecord) -> None:
        if self.thread is None:
            raise RuntimeError("failure collector is not running")
        self.queue.put(record)

    def _consume(self) -> None:
        while True:
            item = self.queue.get()
            if item is _STOP:
                return
            self.records.append(item)

    def stop(self) -> list[FailureRecord]:
        if self.thread is None:
            return list(self.records)
        self.queue.put(_STOP)
        self.thread.join()
        self.thread = None
        return list(self.records)
