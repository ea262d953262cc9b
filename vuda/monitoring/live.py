from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict, List, Optional

SIMULATED_AI_LOGS: List[Dict] = [
    {"text": "AI System Initializing... Analyzing traffic camera feed.", "tags": ["System"]},
    {"text": "Multiple vehicles detected: buses, cars, and auto-rickshaws.", "tags": ["Vehicle", "Traffic"]},
    {"text": "Pedestrian crosswalk is active. High foot traffic detected.", "tags": ["Crowd", "Pedestrian"]},
    {"text": "Vehicle detected: Red public bus (KL-15 registration) stopping at the bus stop.", "tags": ["Vehicle", "Public Transport"]},
    {"text": "Anomaly detected: A motorcycle is attempting to bypass traffic by driving on the shoulder.", "tags": ["Traffic", "Warning"]},
    {"text": "Traffic flow is currently heavy but moving. Monitoring for potential gridlock.", "tags": ["Traffic"]},
    {"text": "Audio analysis: Normal city traffic sounds, horns, and chatter.", "tags": ["Audio"]},
    {"text": "Motorcycle has merged back into traffic. Anomaly resolved.", "tags": ["Traffic", "Resolved"]},
    {"text": "Subject detected waiting at crosswalk for an extended period.", "tags": ["Pedestrian"]},
    {"text": "Vehicle detected: White car, changing lanes without signaling.", "tags": ["Vehicle", "Minor Infraction"]},
    {"text": "Monitoring intersection for red light violations. None detected.", "tags": ["System", "Traffic"]},
    {"text": "A group of pedestrians is crossing against the signal.", "tags": ["Pedestrian", "Warning"]},
    {"text": "No collisions occurred. Pedestrians have crossed safely. Situation normal.", "tags": ["Pedestrian", "Resolved"]},
    {"text": "Bus has departed from the bus stop. Traffic flow resuming.", "tags": ["Public Transport"]},
    {"text": "System check: All camera inputs are nominal. Weather: Clear skies.", "tags": ["System"]},
    {"text": "Another bus approaching the intersection.", "tags": ["Vehicle", "Public Transport"]},
    {"text": "Analysis segment complete. Continuing to monitor live feed.", "tags": ["System"]},
]

LIVE_VIDEO_URL = "https://www.youtube.com/embed/xIT71VDGM6o?autoplay=1&mute=1&controls=0&loop=1&playlist=xIT71VDGM6o"


def tag_variant(tag: str) -> str:
    t = tag.lower()
    if t in ("warning", "minor infraction"):
        return "destructive"
    if t == "resolved":
        return "default"
    if t == "system":
        return "secondary"
    return "outline"


class LiveLogStream:
    """Replays a scripted AI log, one entry per interval after a connect delay.

    ``stop()`` is the only cancellation; the thread also ends on its own
    once the script is exhausted.
    """

    def __init__(
        self,
        script: Optional[List[Dict]] = None,
        interval_s: float = 3.0,
        connect_delay_s: float = 2.0,
    ):
        self.script = list(script if script is not None else SIMULATED_AI_LOGS)
        self.interval_s = interval_s
        self.connect_delay_s = connect_delay_s
        self._logs: List[Dict] = []
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def finished(self) -> bool:
        with self._lock:
            return len(self._logs) >= len(self.script)

    def logs(self) -> List[Dict]:
        with self._lock:
            return list(self._logs)

    def emit_next(self) -> Optional[Dict]:
        with self._lock:
            idx = len(self._logs)
            if idx >= len(self.script):
                return None
            entry = dict(self.script[idx])
            entry["timestamp"] = datetime.now().strftime("%H:%M:%S")
            entry["variants"] = [tag_variant(t) for t in entry.get("tags", [])]
            self._logs.append(entry)
            return entry

    def run(self, stop_event: threading.Event) -> None:
        if stop_event.wait(self.connect_delay_s):
            return
        while self.emit_next() is not None:
            if stop_event.wait(self.interval_s):
                return
        print("[live] script complete")

    def start(self) -> None:
        if self.running:
            return
        with self._lock:
            self._logs = []
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self.run, args=(self._stop,), daemon=True)
        self._thread.start()
        print("[live] stream started")

    def stop(self, timeout_s: float = 2.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout_s)
            print("[live] stream stopped")
        self._thread = None
