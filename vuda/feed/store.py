from __future__ import annotations

import threading
import time
from typing import Any, Dict, List, Optional, Set
from pydantic import ValidationError as PydanticValidationError
from ..shared.errors import ValidationError
from ..shared.incidents import ChatMessage, Incident, IncidentAction
from .generator import INITIAL_INCIDENTS_COUNT, IncidentGenerator

MAX_INCIDENTS = 50
NEW_HIGHLIGHT_S = 8.0

# field name or alias -> alias
_WIRE_KEYS: Dict[str, str] = {}
for _name, _field in Incident.model_fields.items():
    _WIRE_KEYS[_name] = _WIRE_KEYS[_field.alias or _name] = _field.alias or _name


class IncidentStore:
    """Newest-first incident list, capped at ``capacity``.

    Request handlers and the feed thread share one store, so every
    operation runs under a single lock.
    """

    def __init__(
        self,
        generator: IncidentGenerator,
        capacity: int = MAX_INCIDENTS,
        batch_size: int = INITIAL_INCIDENTS_COUNT,
    ):
        self.generator = generator
        self.capacity = capacity
        self.batch_size = batch_size
        self._lock = threading.Lock()
        self._items: List[Incident] = []
        self._added_at: Dict[str, float] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def snapshot(self) -> List[Incident]:
        with self._lock:
            return list(self._items)

    def get(self, incident_id: str) -> Optional[Incident]:
        with self._lock:
            return self._find(incident_id)

    def _find(self, incident_id: str) -> Optional[Incident]:
        for inc in self._items:
            if inc.id == incident_id:
                return inc
        return None

    def append(self, incident: Incident) -> None:
        with self._lock:
            self._items.insert(0, incident)
            del self._items[self.capacity:]
            self._added_at[incident.id] = time.time()

    def update_by_id(self, incident_id: str, patch: Dict[str, Any]) -> Optional[Incident]:
        """Apply ``patch`` (field names or wire aliases) and revalidate.

        A patch that would produce an invalid incident raises
        ``ValidationError`` and leaves the list untouched.
        """
        with self._lock:
            inc = self._find(incident_id)
            if inc is None:
                return None
            data = inc.model_dump(by_alias=True)
            for key, value in patch.items():
                if key not in _WIRE_KEYS:
                    raise ValidationError(f"Unknown incident field: {key}")
                data[_WIRE_KEYS[key]] = value
            try:
                updated = Incident.model_validate(data)
            except PydanticValidationError as e:
                fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
                raise ValidationError(f"Invalid incident update ({fields}).") from e
            idx = next(i for i, cur in enumerate(self._items) if cur is inc)
            self._items[idx] = updated
            return updated

    def append_action(self, incident_id: str, action: IncidentAction) -> Optional[Incident]:
        with self._lock:
            inc = self._find(incident_id)
            if inc is None:
                return None
            return self._replace(inc, action_log=[*inc.action_log, action])

    def append_chat(self, incident_id: str, message: ChatMessage) -> Optional[Incident]:
        with self._lock:
            inc = self._find(incident_id)
            if inc is None:
                return None
            return self._replace(inc, chat_history=[*inc.chat_history, message])

    def fill_summary(self, incident_id: str, summary: str) -> Optional[Incident]:
        """Set ``generated_summary`` unless one is already cached."""
        with self._lock:
            inc = self._find(incident_id)
            if inc is None or inc.generated_summary:
                return inc
            return self._replace(inc, generated_summary=summary)

    def _replace(self, inc: Incident, **patch: Any) -> Incident:
        updated = inc.model_copy(update=patch)
        idx = next(i for i, cur in enumerate(self._items) if cur is inc)
        self._items[idx] = updated
        return updated

    def count_active(self) -> int:
        with self._lock:
            return sum(1 for inc in self._items if inc.is_active)

    def refresh(self) -> List[Incident]:
        batch = self.generator.generate_initial_batch(self.batch_size)
        with self._lock:
            self._items = batch[: self.capacity]
            self._added_at.clear()
            return list(self._items)

    def newly_added(self, window_s: float = NEW_HIGHLIGHT_S) -> Set[str]:
        """Ids appended within the last ``window_s`` seconds."""
        cutoff = time.time() - window_s
        with self._lock:
            for k in [k for k, t in self._added_at.items() if t < cutoff]:
                del self._added_at[k]
            live = {inc.id for inc in self._items}
            return {k for k in self._added_at if k in live}
