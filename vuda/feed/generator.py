from __future__ import annotations

import itertools
import random
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple
from urllib.parse import quote
from ..shared.incidents import INCIDENT_TYPES, Incident, IncidentAction
from .pools import (
    ACTION_LOG_SAMPLES,
    INITIAL_ACTIONS,
    INITIAL_ANALYSES,
    LOCATIONS,
    PREFERRED_TYPES,
    TITLES,
)

CITY_CENTER: Tuple[float, float] = (8.50, 76.91)
SPREAD = 0.05
PREFERRED_PROBABILITY = 0.6
RESOLVED_PROBABILITY = 0.1
PRESUMMARIZED_PROBABILITY = 0.3
MAX_BACKDATE_S = 300
INITIAL_INCIDENTS_COUNT = 7


def _now() -> datetime:
    return datetime.now(timezone.utc)


class IncidentGenerator:
    """Builds synthetic incidents for the simulated city feed.

    Each generator owns its id counter, so two generators never share state.
    Ids combine the counter with wall-clock milliseconds (``inc-<n>-<ms>``).
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _now,
        center: Tuple[float, float] = CITY_CENTER,
        spread: float = SPREAD,
    ):
        self.rng = rng or random.Random()
        self.clock = clock
        self.center = center
        self.spread = spread
        self._counter = itertools.count(1)

    def _next_id(self) -> str:
        return f"inc-{next(self._counter)}-{int(time.time() * 1000)}"

    def _pick_type(self) -> str:
        if self.rng.random() < PREFERRED_PROBABILITY:
            return self.rng.choice(PREFERRED_TYPES)
        rest = [t for t in INCIDENT_TYPES if t not in PREFERRED_TYPES]
        return self.rng.choice(rest)

    def _pick_status(self) -> str:
        status = self.rng.choice(["Critical", "Warning", "New"])
        if self.rng.random() < RESOLVED_PROBABILITY:
            return "Resolved"
        return status

    def _jitter(self, base: float) -> float:
        return base + self.rng.uniform(-self.spread, self.spread)

    def _seed_action_log(self, now: datetime) -> List[IncidentAction]:
        sample = self.rng.choice(ACTION_LOG_SAMPLES)
        local = now.astimezone()
        out = []
        for description in sample:
            ts = local - timedelta(minutes=self.rng.randint(0, 4))
            out.append(IncidentAction(timestamp=ts.strftime("%H:%M:%S"), description=description))
        return out

    def generate(self) -> Incident:
        incident_type = self._pick_type()
        status = self._pick_status()
        analysis = self.rng.choice(INITIAL_ANALYSES[incident_type])
        now = self.clock()
        summary = None
        if self.rng.random() < PRESUMMARIZED_PROBABILITY:
            summary = f"AI-generated summary: {analysis[:100]}... Further details are being processed."
        return Incident(
            id=self._next_id(),
            type=incident_type,
            title=self.rng.choice(TITLES[incident_type]),
            location=self.rng.choice(LOCATIONS),
            timestamp=now - timedelta(milliseconds=self.rng.randrange(MAX_BACKDATE_S * 1000)),
            status=status,
            latitude=self._jitter(self.center[0]),
            longitude=self._jitter(self.center[1]),
            camera_image=f"https://placehold.co/600x400.png?text={quote(incident_type.replace(' ', '+'))}",
            initial_ai_system_analysis=analysis,
            initial_actions_taken=self.rng.choice(INITIAL_ACTIONS),
            generated_summary=summary,
            action_log=self._seed_action_log(now),
        )

    def generate_initial_batch(self, n: int = INITIAL_INCIDENTS_COUNT) -> List[Incident]:
        batch = [self.generate() for _ in range(n)]
        batch.sort(key=lambda i: i.timestamp, reverse=True)
        return batch
