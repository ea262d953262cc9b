from __future__ import annotations

from typing import Any, Optional
from vertexai.generative_models import Part
from ...config.settings import Settings
from ...shared.media import decode_data_uri
from ..base import GeminiAgent
from ..schemas import VideoClassification, VideoReport
from .prompts import render_classify_prompt, render_report_prompt


class VideoClassifier(GeminiAgent):
    name = "classifier"
    temperature = 0.0

    def __init__(self, cfg: Settings, model: Optional[Any] = None):
        super().__init__(cfg, cfg.gemini_video_model, model=model)

    def _video_part(self, video_data_uri: str) -> Part:
        mime, data = decode_data_uri(video_data_uri)
        return Part.from_data(data=data, mime_type=mime)

    def classify(self, video_data_uri: str) -> VideoClassification:
        video = self._video_part(video_data_uri)
        return self._call([render_classify_prompt(), video], VideoClassification)

    def report(self, video_data_uri: str) -> VideoReport:
        video = self._video_part(video_data_uri)
        return self._call([render_report_prompt(), video], VideoReport)
