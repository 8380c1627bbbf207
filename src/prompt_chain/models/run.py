"""Pydantic model for one execution of a chain."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional, TypeAlias

from pydantic import BaseModel, Field

from prompt_chain.models.identifiers import Identifier

RunStatus: TypeAlias = Literal["pending", "running", "success", "failed"]


class Run(BaseModel):
    id: Optional[Identifier] = None
    tenant_id: Optional[Identifier] = None
    project_id: Optional[Identifier] = None
    chain_id: Optional[Identifier] = None
    input: dict[str, Any] = Field(default_factory=dict)
    chain_snapshot: list[dict[str, Any]] = Field(default_factory=list)
    status: RunStatus = "pending"
    total_tokens_in: Optional[int] = None
    total_tokens_out: Optional[int] = None
    duration_ms: Optional[int] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    error_message: Optional[str] = None
