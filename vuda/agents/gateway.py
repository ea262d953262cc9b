from __future__ import annotations

from dataclasses import dataclass
from ..config.settings import Settings
from .chat.chat import IncidentChat
from .classifier.classifier import VideoClassifier
from .summarizer.summarizer import IncidentSummarizer


@dataclass
class AIGateway:
    classifier: VideoClassifier
    chat: IncidentChat
    summarizer: IncidentSummarizer

    @classmethod
    def from_settings(cls, cfg: Settings) -> "AIGateway":
        return cls(
            classifier=VideoClassifier(cfg),
            chat=IncidentChat(cfg),
            summarizer=IncidentSummarizer(cfg),
        )
