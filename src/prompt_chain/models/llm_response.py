"""Pydantic model for a provider response."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class LlmResponse(BaseModel):
    content: str = ""
    usage: dict[str, Optional[int]] = Field(default_factory=dict)
    raw: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)

    @property
    def tokens_in(self) -> int | None:
        value = self.usage.get("tokens_in")
        return value if value is not None else self.usage.get("prompt_tokens")

    @property
    def tokens_out(self) -> int | None:
        value = self.usage.get("tokens_out")
        return value if value is not None else self.usage.get("completion_tokens")
