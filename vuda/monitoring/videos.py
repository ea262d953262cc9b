from __future__ import annotations

import itertools
import threading
import time
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from ..agents.classifier.classifier import VideoClassifier
from ..agents.chat.chat import IncidentChat
from ..agents.schemas import ChatRequest, ChatTurn, IncidentContext, VideoClassification
from ..shared.errors import DashboardError, ValidationError
from ..shared.incidents import ChatMessage
from ..shared.media import VideoUpload
from ..shared.toasts import Toast, Variant

VideoStatus = Literal["pending", "analyzing", "analyzed", "error"]
Priority = Literal["Critical", "High", "Medium"]

CHAT_FALLBACK = "Could not get a response from the AI. Please try again."
MAX_VIDEOS = 20

ANOMALY_PRIORITIES: Dict[str, Priority] = {
    "Weapon_Visible": "Critical",
    "Hostage_Situation": "Critical",
    "Person_Collapsed": "Critical",
    "Unconscious_Person": "Critical",
    "Explosion_Or_Smoke": "Critical",
    "Arson": "Critical",
    "Child_Abduction_Attempt": "Critical",
    "Building_Collapse_Risk": "Critical",
    "Active_Shooter": "Critical",
    "Hit_And_Run": "Critical",
    "Fire_Outbreak": "Critical",
    "Physical_Assault": "High",
    "Fighting": "High",
    "Seizure_Activity": "High",
    "Crowd_Stampede": "High",
    "Riots_Or_Protest_Violence": "High",
    "Reckless_Driving": "High",
    "Accident_With_Injuries": "High",
    "Burglary_In_Progress": "High",
    "Robbery": "High",
    "Elderly_Person_Fallen": "High",
    "Gas_Leak_Suspected": "High",
    "Electrical_Spark_Hazard": "High",
    "Vandalism_In_Progress": "Medium",
    "Loitering_With_Intent": "Medium",
    "Unauthorized_Access": "Medium",
    "Shoplifting": "Medium",
    "Pedestrian_In_Danger": "Medium",
    "Public_Intoxication": "Medium",
    "Harassment": "Medium",
    "Lost_Child": "Medium",
}

_VARIANTS: Dict[Priority, Variant] = {"Critical": "destructive", "High": "accent", "Medium": "default"}


def anomaly_priority(key: str) -> Priority:
    return ANOMALY_PRIORITIES.get(key, "Medium")


def humanize(key: str) -> str:
    return key.replace("_", " ")


class VideoFeed(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    filename: str
    content_type: str = Field(alias="contentType")
    data: bytes = Field(exclude=True, repr=False)
    status: VideoStatus = "pending"
    analysis_result: Optional[VideoClassification] = Field(default=None, alias="analysisResult")
    error: Optional[str] = None
    chat_history: List[ChatMessage] = Field(default_factory=list, alias="chatHistory")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="createdAt")

    def with_message(self, sender: str, text: str) -> "VideoFeed":
        return self.model_copy(update={"chat_history": [*self.chat_history, ChatMessage(sender=sender, text=text)]})

    def data_uri(self) -> str:
        return VideoUpload(self.filename, self.content_type, self.data).data_uri()

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class MonitoringService:
    """Operator-uploaded video feeds, each classified once and chattable."""

    def __init__(self, classifier: VideoClassifier, chat: IncidentChat, capacity: int = MAX_VIDEOS):
        self.classifier = classifier
        self.chat_agent = chat
        self.capacity = capacity
        self._feeds: Dict[str, VideoFeed] = {}
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    def _put(self, feed: VideoFeed) -> VideoFeed:
        """Store an update to a known feed; evicted feeds stay evicted."""
        with self._lock:
            if feed.id in self._feeds:
                self._feeds[feed.id] = feed
        return feed

    def _evict(self, keep: str) -> None:
        # oldest first; the new clip and clips still being classified are kept
        for feed_id in [k for k, f in self._feeds.items() if k != keep and f.status != "analyzing"]:
            if len(self._feeds) <= self.capacity:
                break
            del self._feeds[feed_id]

    def get(self, feed_id: str) -> Optional[VideoFeed]:
        with self._lock:
            return self._feeds.get(feed_id)

    def list(self) -> List[VideoFeed]:
        with self._lock:
            return list(self._feeds.values())

    def add(self, upload: VideoUpload) -> VideoFeed:
        feed = VideoFeed(
            id=f"vid-{next(self._seq)}-{int(time.time() * 1000)}",
            filename=upload.filename,
            content_type=upload.content_type,
            data=upload.data,
        )
        with self._lock:
            self._feeds[feed.id] = feed
            self._evict(keep=feed.id)
        return feed

    def analyze(self, feed_id: str) -> Optional[Tuple[VideoFeed, Toast]]:
        feed = self.get(feed_id)
        if feed is None:
            return None
        feed = feed.model_copy(update={"status": "analyzing", "error": None})
        feed = self._put(feed.with_message("ai", f"Analyzing video: {feed.filename}"))
        try:
            result = self.classifier.classify(feed.data_uri())
        except DashboardError as e:
            msg = str(e) or "An unexpected error occurred during analysis."
            print(f"[monitoring] analysis failed for {feed.filename}:", msg)
            feed = feed.model_copy(update={"status": "error", "error": msg})
            feed = self._put(feed.with_message("ai", f"Error: {msg}"))
            return feed, Toast(title="Analysis Error", description=msg, variant="destructive")

        feed = feed.model_copy(update={"status": "analyzed", "analysis_result": result})
        if result.is_significant:
            label = humanize(result.incident_type)
            variant = _VARIANTS[anomaly_priority(result.incident_type)]
            feed = feed.with_message("ai", f"Anomaly Detected: {label}")
            toast = Toast(title=f"New Alert: {label}", description=f"From video: {feed.filename}", variant=variant)
        else:
            feed = feed.with_message("ai", "Analysis complete. No significant anomalies detected.")
            toast = Toast(title="Analysis Complete", description=f"No significant anomalies in {feed.filename}.")
        print(f"[monitoring] {feed.filename}: significant={result.is_significant} type={result.incident_type}")
        return self._put(feed), toast

    def chat(self, feed_id: str, question: str) -> Optional[Tuple[VideoFeed, Optional[Toast]]]:
        q = (question or "").strip()
        if not q:
            raise ValidationError("Please provide a question.")
        feed = self.get(feed_id)
        if feed is None:
            return None
        history = [ChatTurn(sender=m.sender, text=m.text) for m in feed.chat_history]
        feed = self._put(feed.with_message("user", q))
        analysis = "None"
        if feed.analysis_result:
            analysis = f"Anomaly: {feed.analysis_result.incident_type}"
        req = ChatRequest(
            user_question=q,
            incident_context=IncidentContext(
                title=f"Video Analysis: {feed.filename}",
                location="Uploaded Video",
                timestamp=datetime.now(timezone.utc).isoformat(),
                initial_ai_system_analysis=analysis,
            ),
            chat_history=history,
        )
        toast = None
        try:
            text = self.chat_agent.reply(req, video_data_uri=feed.data_uri()).ai_response
        except DashboardError as e:
            print(f"[monitoring] chat failed for {feed.filename}:", e)
            text = CHAT_FALLBACK
            toast = Toast(title="Chat Error", description=CHAT_FALLBACK, variant="destructive")
        current = self.get(feed_id) or feed
        return self._put(current.with_message("ai", text)), toast
