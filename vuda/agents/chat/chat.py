from __future__ import annotations

from typing import Any, List, Optional
from vertexai.generative_models import Part
from ...config.settings import Settings
from ...shared.media import decode_data_uri
from ..base import GeminiAgent
from ..schemas import ChatReply, ChatRequest
from .prompts import CHAT_SYSTEM, MAX_HISTORY, render_chat_prompt


class IncidentChat(GeminiAgent):
    name = "chat"
    temperature = 0.2

    def __init__(self, cfg: Settings, model: Optional[Any] = None):
        super().__init__(cfg, cfg.gemini_chat_model, model=model)

    def reply(self, req: ChatRequest, video_data_uri: Optional[str] = None) -> ChatReply:
        if len(req.chat_history) > MAX_HISTORY:
            req = req.model_copy(update={"chat_history": req.chat_history[-MAX_HISTORY:]})
        parts: List[Any] = [CHAT_SYSTEM, render_chat_prompt(req)]
        if video_data_uri:
            mime, data = decode_data_uri(video_data_uri)
            parts.append(Part.from_data(data=data, mime_type=mime))
        return self._call(parts, ChatReply)
