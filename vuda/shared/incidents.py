from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import List, Literal, Optional, get_args
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


IncidentType = Literal[
    "Violent Crime",
    "Medical Emergency",
    "Fire Alert",
    "Traffic Accident",
    "Suspicious Activity",
    "Public Safety Threat",
]
IncidentStatus = Literal["Critical", "Warning", "Resolved", "New"]
Sender = Literal["user", "ai"]

INCIDENT_TYPES: List[str] = list(get_args(IncidentType))
ACTIVE_STATUSES = ("Critical", "Warning", "New")

_ANOMALY_TAGS = re.compile(r"\(Detected Anomalies: ([^)]+)\)")


class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IncidentAction(_Camel):
    timestamp: str
    description: str
    assigned_to_department: Optional[str] = Field(default=None, alias="assignedToDepartment")


class ChatMessage(_Camel):
    id: str = Field(default_factory=new_id)
    sender: Sender
    text: str
    timestamp: datetime = Field(default_factory=utcnow)


class Incident(_Camel):
    id: str
    type: IncidentType
    title: str
    location: str
    timestamp: datetime
    status: IncidentStatus
    latitude: float
    longitude: float
    camera_image: Optional[str] = Field(default=None, alias="cameraImage")
    initial_ai_system_analysis: Optional[str] = Field(default=None, alias="initialAISystemAnalysis")
    initial_actions_taken: Optional[str] = Field(default=None, alias="initialActionsTaken")
    generated_summary: Optional[str] = Field(default=None, alias="generatedSummary")
    action_log: List[IncidentAction] = Field(default_factory=list, alias="actionLog")
    chat_history: List[ChatMessage] = Field(default_factory=list, alias="chatHistory")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def anomaly_tags(self, limit: int = 3) -> List[str]:
        m = _ANOMALY_TAGS.search(self.initial_ai_system_analysis or "")
        if not m:
            return []
        return [t.strip() for t in m.group(1).split(",") if t.strip()][:limit]

    def to_json(self) -> dict:
        out = self.model_dump(mode="json", by_alias=True)
        out["anomalyTags"] = self.anomaly_tags()
        return out


def clock_stamp(ts: Optional[datetime] = None) -> str:
    return (ts or datetime.now()).strftime("%H:%M:%S")
