from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set
from ..agents.gateway import AIGateway
from ..agents.schemas import ChatRequest, ChatTurn, IncidentContext, SummaryRequest
from ..feed.store import IncidentStore
from ..monitoring.handoff import IncidentInbox
from ..shared.errors import DashboardError, ValidationError
from ..shared.incidents import ChatMessage, Incident, IncidentAction, clock_stamp
from ..shared.toasts import Toast

CHAT_FALLBACK = "Could not get a response from the AI. Please try again."
DEFAULT_ANALYSIS = "Initial sensor data received."
DEFAULT_ACTIONS = "Automated alerts initiated."


@dataclass
class Outcome:
    incident: Optional[Incident]
    toast: Optional[Toast] = None
    loading: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "incident": self.incident.to_json() if self.incident else None,
            "toast": self.toast.to_json() if self.toast else None,
            "loading": self.loading,
        }


def summary_request(incident: Incident) -> SummaryRequest:
    return SummaryRequest(
        event_title=incident.title,
        location=incident.location,
        timestamp=incident.timestamp.isoformat(),
        ai_analysis=incident.initial_ai_system_analysis or DEFAULT_ANALYSIS,
        actions_taken=incident.initial_actions_taken or DEFAULT_ACTIONS,
    )


def incident_context(incident: Incident) -> IncidentContext:
    return IncidentContext(
        title=incident.title,
        location=incident.location,
        timestamp=incident.timestamp.isoformat(),
        initial_ai_system_analysis=incident.initial_ai_system_analysis,
        generated_summary=incident.generated_summary,
    )


class DashboardService:
    """Incident detail actions: report, chat and dispatch.

    Gateway failures never escape: they come back as a destructive toast
    and the incident is left as it was before the call.
    """

    def __init__(self, store: IncidentStore, gateway: AIGateway, inbox: Optional[IncidentInbox] = None):
        self.store = store
        self.gateway = gateway
        self.inbox = inbox
        self._summarizing: Set[str] = set()
        self._lock = threading.Lock()

    def sync(self) -> List[Incident]:
        """Merge incidents handed off by the upload flow into the store."""
        if self.inbox is None:
            return []
        delivered = self.inbox.drain()
        for inc in delivered:
            self.store.append(inc)
        return delivered

    def incidents(self) -> List[Incident]:
        self.sync()
        return self.store.snapshot()

    def kpi(self) -> Dict[str, Any]:
        items = self.store.snapshot()
        return {
            "activeIncidents": self.store.count_active(),
            "criticalIncidents": sum(1 for i in items if i.status == "Critical"),
            "totalIncidents": len(items),
            "avgResponseTime": "-70%",
            "falseAlarms": "-50%",
            "systemStatus": "Online",
        }

    def refresh(self) -> Toast:
        self.store.refresh()
        print(f"[dashboard] alerts refreshed ({len(self.store)} incidents)")
        return Toast(title="Alerts Refreshed", description="Showing the latest incident data.")

    def view_report(self, incident_id: str) -> Optional[Outcome]:
        incident = self.store.get(incident_id)
        if incident is None:
            return None
        if incident.generated_summary:
            return Outcome(incident=incident)
        with self._lock:
            if incident_id in self._summarizing:
                return Outcome(incident=incident, loading=True)
            self._summarizing.add(incident_id)
        try:
            reply = self.gateway.summarizer.summarize(summary_request(incident))
        except DashboardError as e:
            print(f"[dashboard] summary failed for {incident_id}:", e)
            return Outcome(
                incident=self.store.get(incident_id) or incident,
                toast=Toast(
                    title="AI Summary Error",
                    description="Could not generate AI summary for this incident.",
                    variant="destructive",
                ),
            )
        finally:
            with self._lock:
                self._summarizing.discard(incident_id)
        updated = self.store.fill_summary(incident_id, reply.summary)
        return Outcome(incident=updated or incident.model_copy(update={"generated_summary": reply.summary}))

    def chat(self, incident_id: str, question: str) -> Optional[Outcome]:
        q = (question or "").strip()
        if not q:
            raise ValidationError("Please provide a question.")
        incident = self.store.get(incident_id)
        if incident is None:
            return None
        history = [ChatTurn(sender=m.sender, text=m.text) for m in incident.chat_history]
        self.store.append_chat(incident_id, ChatMessage(sender="user", text=q))
        req = ChatRequest(user_question=q, incident_context=incident_context(incident), chat_history=history)
        toast = None
        try:
            text = self.gateway.chat.reply(req).ai_response
        except DashboardError as e:
            print(f"[dashboard] chat failed for {incident_id}:", e)
            text = CHAT_FALLBACK
            toast = Toast(title="Chat Error", description=CHAT_FALLBACK, variant="destructive")
        updated = self.store.append_chat(incident_id, ChatMessage(sender="ai", text=text))
        return Outcome(incident=updated, toast=toast)

    def dispatch(self, incident_id: str, department: str) -> Optional[Outcome]:
        dept = (department or "").strip()
        if not dept:
            raise ValidationError("Please choose a department to dispatch.")
        action = IncidentAction(
            timestamp=clock_stamp(),
            description=f"Operator dispatched {dept} unit.",
            assigned_to_department=dept,
        )
        updated = self.store.append_action(incident_id, action)
        if updated is None:
            return None
        print(f"[dashboard] {dept} dispatched to {incident_id}")
        return Outcome(
            incident=updated,
            toast=Toast(title=f"{dept} Dispatched", description=f"Alert sent to {dept} for incident: {updated.title}"),
        )
