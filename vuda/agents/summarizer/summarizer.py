from __future__ import annotations

from typing import Any, Optional
from ...config.settings import Settings
from ..base import GeminiAgent
from ..schemas import SummaryReply, SummaryRequest
from .prompts import SUMMARY_SYSTEM, render_summary_prompt


class IncidentSummarizer(GeminiAgent):
    name = "summarizer"
    temperature = 0.3

    def __init__(self, cfg: Settings, model: Optional[Any] = None):
        super().__init__(cfg, cfg.gemini_summary_model, model=model)

    def summarize(self, req: SummaryRequest) -> SummaryReply:
        return self._call([SUMMARY_SYSTEM, render_summary_prompt(req)], SummaryReply)
