from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class VideoClassification(_Camel):
    is_significant: bool = Field(alias="isSignificant")
    incident_type: str = Field(alias="incidentType", min_length=1)


class VideoReport(_Camel):
    report: str = Field(min_length=1)
    incident_type: str = Field(alias="incidentType", min_length=1)
    suggested_department: str = Field(default="None", alias="suggestedDepartment")


class ChatTurn(_Camel):
    sender: Literal["user", "ai"]
    text: str


class IncidentContext(_Camel):
    title: str
    location: str
    timestamp: str
    initial_ai_system_analysis: Optional[str] = Field(default=None, alias="initialAISystemAnalysis")
    generated_summary: Optional[str] = Field(default=None, alias="generatedSummary")


class ChatRequest(_Camel):
    user_question: str = Field(alias="userQuestion")
    incident_context: IncidentContext = Field(alias="incidentContext")
    chat_history: List[ChatTurn] = Field(default_factory=list, alias="chatHistory")


class ChatReply(_Camel):
    ai_response: str = Field(alias="aiResponse", min_length=1)


class SummaryRequest(_Camel):
    event_title: str = Field(alias="eventTitle")
    location: str
    timestamp: str
    ai_analysis: str = Field(alias="aiAnalysis")
    actions_taken: str = Field(alias="actionsTaken")


class SummaryReply(_Camel):
    summary: str = Field(min_length=1)
