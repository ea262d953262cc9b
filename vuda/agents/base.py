from __future__ import annotations

import json
import re
import time
from typing import Any, Dict, List, Optional, Type, TypeVar
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from vertexai.generative_models import GenerativeModel
from ..config.settings import Settings
from ..shared.errors import ConfigurationError, NetworkError, SchemaError
from ..shared.vertex_client import init_vertex

M = TypeVar("M", bound=BaseModel)


def _parse_json(text: str) -> Dict[str, Any]:
    m = re.search(r"\{.*\}", text or "", re.DOTALL)
    if not m:
        raise SchemaError(f"No JSON returned by model. Raw: {(text or '')[:200]}")
    try:
        out = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise SchemaError(f"Model returned malformed JSON: {e}") from e
    if not isinstance(out, dict):
        raise SchemaError("Model returned a JSON value that is not an object.")
    return out


def validate_output(model_cls: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise SchemaError(f"The AI model returned an invalid data structure ({fields}).") from e


class GeminiAgent:
    """Common plumbing for the Gemini-backed gateway calls.

    The Vertex model is created on first use; tests pass any object with a
    ``generate_content`` method as ``model``.
    """

    name = "agent"
    temperature = 0.1

    def __init__(self, cfg: Settings, model_name: str, model: Optional[Any] = None):
        self.cfg = cfg
        self.model_name = model_name
        self.model = model

    def _model(self) -> Any:
        if self.model is None:
            init_vertex(self.cfg)
            self.model = GenerativeModel(self.model_name)
        return self.model

    def _generate(self, parts: List[Any]) -> str:
        t0 = time.time()
        try:
            resp = self._model().generate_content(
                parts,
                generation_config={"temperature": self.temperature, "max_output_tokens": 8192},
            )
            text = resp.text
        except ConfigurationError:
            raise
        except Exception as e:
            print(f"[gateway][{self.name}] error:", e)
            raise NetworkError(str(e) or e.__class__.__name__) from e
        latency_ms = int((time.time() - t0) * 1000)
        print(f"[gateway][{self.name}] model={self.model_name} latency_ms={latency_ms}")
        return text

    def _call(self, parts: List[Any], model_cls: Type[M]) -> M:
        raw = self._generate(parts)
        return validate_output(model_cls, _parse_json(raw))
