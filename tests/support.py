"""Shared builders for the test suite."""

import json
import random
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

from vuda.agents.chat.chat import IncidentChat
from vuda.agents.classifier.classifier import VideoClassifier
from vuda.agents.gateway import AIGateway
from vuda.agents.summarizer.summarizer import IncidentSummarizer
from vuda.config.settings import Settings
from vuda.feed.generator import IncidentGenerator
from vuda.feed.store import IncidentStore
from vuda.shared.incidents import Incident

VIDEO_URI = "data:video/mp4;base64,AAAAIGZ0eXBpc29t"


def fake_model(*replies, error=None):
    """A stand-in for a Vertex GenerativeModel.

    Dict replies are sent back as JSON text, one per call; the last one repeats.
    """
    model = MagicMock()
    if error is not None:
        model.generate_content.side_effect = error
        return model
    queue = [json.dumps(r) if isinstance(r, dict) else r for r in replies]

    def respond(parts, generation_config=None):
        text = queue.pop(0) if len(queue) > 1 else queue[0]
        return SimpleNamespace(text=text)

    model.generate_content.side_effect = respond
    return model


def sent_parts(model, call=0):
    return model.generate_content.call_args_list[call][0][0]


def make_settings(**overrides):
    values = dict(
        gcp_project="test-project",
        gcp_region="us-central1",
        gemini_video_model="gemini-test-video",
        gemini_chat_model="gemini-test-chat",
        gemini_summary_model="gemini-test-summary",
        google_maps_api_key="",
        max_upload_bytes=20 * 1024 * 1024,
        feed_min_interval_s=10.0,
        feed_max_interval_s=15.0,
        initial_incidents=7,
        chat_host="127.0.0.1",
        chat_port=8000,
        missing=("GOOGLE_MAPS_API_KEY",),
    )
    values.update(overrides)
    return Settings(**values)


def make_incident(incident_id="inc-1", lat=8.5, lon=76.91, status="Warning", **extra):
    fields = dict(
        id=incident_id,
        type="Traffic Accident",
        title="Multi-vehicle Collision",
        location="Pattom Main Road",
        timestamp=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        status=status,
        latitude=lat,
        longitude=lon,
        initial_ai_system_analysis="Two vehicles collided. (Detected Anomalies: Accident_With_Injuries, Road_Blockage_Hazard)",
        initial_actions_taken="Traffic management system rerouting vehicles.",
    )
    fields.update(extra)
    return Incident(**fields)


def make_gateway(cfg, video=None, chat=None, summary=None):
    return AIGateway(
        classifier=VideoClassifier(cfg, model=video or fake_model({"isSignificant": False, "incidentType": "Normal_Activity"})),
        chat=IncidentChat(cfg, model=chat or fake_model({"aiResponse": "No further details."})),
        summarizer=IncidentSummarizer(cfg, model=summary or fake_model({"summary": "Collision blocking two lanes."})),
    )


def make_store(seed=42):
    generator = IncidentGenerator(rng=random.Random(seed))
    return IncidentStore(generator), generator
