from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Tuple
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    gcp_project: str
    gcp_region: str
    gemini_video_model: str
    gemini_chat_model: str
    gemini_summary_model: str
    google_maps_api_key: str
    max_upload_bytes: int
    feed_min_interval_s: float
    feed_max_interval_s: float
    initial_incidents: int
    chat_host: str
    chat_port: int
    missing: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ai_configured(self) -> bool:
        return "GCP_PROJECT" not in self.missing

    @property
    def maps_configured(self) -> bool:
        return "GOOGLE_MAPS_API_KEY" not in self.missing


def _require(name: str, missing: List[str]) -> str:
    v = os.getenv(name, "").strip()
    if not v:
        missing.append(name)
    return v


def _optional(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def load_settings(env_path: str = ".env") -> Settings:
    load_dotenv(env_path)
    missing: List[str] = []

    return Settings(
        gcp_project=_require("GCP_PROJECT", missing),
        gcp_region=_optional("GCP_REGION", "us-central1"),
        gemini_video_model=_optional("GEMINI_VIDEO_MODEL", "gemini-2.5-flash"),
        gemini_chat_model=_optional("GEMINI_CHAT_MODEL", "gemini-2.5-flash"),
        gemini_summary_model=_optional("GEMINI_SUMMARY_MODEL", "gemini-2.5-flash"),
        google_maps_api_key=_require("GOOGLE_MAPS_API_KEY", missing),
        max_upload_bytes=int(_optional("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024))),
        feed_min_interval_s=float(_optional("FEED_MIN_INTERVAL_S", "10")),
        feed_max_interval_s=float(_optional("FEED_MAX_INTERVAL_S", "15")),
        initial_incidents=int(_optional("INITIAL_INCIDENTS", "7")),
        chat_host=_optional("CHAT_HOST", "127.0.0.1"),
        chat_port=int(_optional("CHAT_PORT", os.getenv("PORT", "8000"))),
        missing=tuple(missing),
    )
