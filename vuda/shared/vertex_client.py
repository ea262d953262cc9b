from __future__ import annotations

from vertexai import init as vertex_init
from ..config.settings import Settings
from .errors import ConfigurationError

_initialized: set = set()


def init_vertex(cfg: Settings) -> None:
    if not cfg.ai_configured:
        raise ConfigurationError("AI provider is not configured: set GCP_PROJECT in the environment.")
    key = (cfg.gcp_project, cfg.gcp_region)
    if key in _initialized:
        return
    vertex_init(project=cfg.gcp_project, location=cfg.gcp_region)
    _initialized.add(key)
