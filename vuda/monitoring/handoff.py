from __future__ import annotations

import itertools
import random
import threading
import time
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple
from ..agents.classifier.classifier import VideoClassifier
from ..agents.schemas import VideoReport
from ..shared.incidents import INCIDENT_TYPES, Incident, IncidentAction, clock_stamp, utcnow
from ..shared.media import VideoUpload
from ..shared.toasts import Toast

UPLOAD_CENTER = (8.5241, 76.9366)
UPLOAD_SPREAD = 0.05
FALLBACK_TYPE = "Suspicious Activity"


class IncidentInbox:
    """Incidents raised outside the dashboard, waiting to be merged into it.

    Upload analysis puts incidents here; the dashboard drains them into its
    store on its next read.
    """

    def __init__(self):
        self._pending: "OrderedDict[str, Incident]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def put(self, incident: Incident) -> None:
        with self._lock:
            self._pending[incident.id] = incident

    def update(self, incident_id: str, fn: Callable[[Incident], Incident]) -> Optional[Incident]:
        with self._lock:
            inc = self._pending.get(incident_id)
            if inc is None:
                return None
            self._pending[incident_id] = fn(inc)
            return self._pending[incident_id]

    def drain(self) -> List[Incident]:
        with self._lock:
            out = list(self._pending.values())
            self._pending.clear()
            return out


def incident_from_report(report: VideoReport, seq: int, rng: Optional[random.Random] = None) -> Incident:
    rng = rng or random.Random()
    incident_type = report.incident_type if report.incident_type in INCIDENT_TYPES else FALLBACK_TYPE
    return Incident(
        id=f"vid-upload-{seq}-{int(time.time() * 1000)}",
        type=incident_type,
        title=f"Uploaded Video: {report.incident_type}",
        location="Uploaded Video Analysis",
        timestamp=utcnow(),
        status="Critical",
        latitude=UPLOAD_CENTER[0] + rng.uniform(-UPLOAD_SPREAD, UPLOAD_SPREAD),
        longitude=UPLOAD_CENTER[1] + rng.uniform(-UPLOAD_SPREAD, UPLOAD_SPREAD),
        camera_image="https://placehold.co/600x400.png?text=From+Upload",
        initial_ai_system_analysis=report.report,
        initial_actions_taken="Manual analysis initiated via video upload.",
        action_log=[IncidentAction(timestamp=clock_stamp(), description="Incident created from video upload.")],
    )


class UploadService:
    def __init__(self, classifier: VideoClassifier, inbox: IncidentInbox, rng: Optional[random.Random] = None):
        self.classifier = classifier
        self.inbox = inbox
        self.rng = rng or random.Random()
        self._seq = itertools.count(1)

    def analyze(self, upload: VideoUpload) -> Tuple[VideoReport, Incident, Toast]:
        """Report on an uploaded video and raise it as a dashboard incident.

        Gateway errors propagate; the API turns them into an error response.
        """
        report = self.classifier.report(upload.data_uri())
        incident = incident_from_report(report, next(self._seq), self.rng)
        self.inbox.put(incident)
        print(f"[monitoring] upload {upload.filename} raised {incident.id} ({report.incident_type})")
        toast = Toast(
            title="Analysis Complete & Alert Raised",
            description="The incident has been added to the Live Alerts feed.",
        )
        return report, incident, toast

    def dispatch(self, incident_id: str, department: str = "Police") -> Optional[Incident]:
        action = IncidentAction(
            timestamp=clock_stamp(),
            description=f"Operator dispatched {department} unit.",
            assigned_to_department=department,
        )
        return self.inbox.update(
            incident_id,
            lambda inc: inc.model_copy(update={"action_log": [*inc.action_log, action]}),
        )
