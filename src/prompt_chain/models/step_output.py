"""In-memory output of an executed step."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class StepOutput:
    parsed_output: Any = None
    raw_output: str | None = None
    response_raw: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
