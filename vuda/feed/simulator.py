from __future__ import annotations

import random
import threading
from typing import Optional
from ..shared.incidents import Incident
from .generator import IncidentGenerator
from .store import IncidentStore

JOIN_TIMEOUT_S = 2.0


class FeedSimulator:
    """Appends one generated incident to the store every 10-15 seconds."""

    def __init__(
        self,
        store: IncidentStore,
        generator: IncidentGenerator,
        min_interval_s: float = 10.0,
        max_interval_s: float = 15.0,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.generator = generator
        self.min_interval_s = float(min_interval_s)
        self.max_interval_s = float(max(max_interval_s, min_interval_s))
        self.rng = rng or random.Random()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_delay(self) -> float:
        return self.rng.uniform(self.min_interval_s, self.max_interval_s)

    def tick(self) -> Incident:
        incident = self.generator.generate()
        self.store.append(incident)
        if incident.is_active:
            print(f"[feed] new alert: {incident.title} @ {incident.location} ({incident.status})")
        return incident

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        ev = stop_event or self._stop
        while not ev.wait(self.next_delay()):
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self.run, args=(self._stop,), daemon=True)
        self._thread.start()
        print("[feed] simulator started")

    def stop(self, timeout_s: float = JOIN_TIMEOUT_S) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout_s)
            print("[feed] simulator stopped")
        self._thread = None
