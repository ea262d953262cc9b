from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

Variant = Literal["default", "accent", "destructive"]


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: Variant = "default"

    def to_json(self) -> dict:
        return asdict(self)
