"""Pydantic model for the record of one executed node."""

from __future__ import annotations

from typing import Any, Literal, Optional, TypeAlias

from pydantic import BaseModel, Field

from prompt_chain.models.identifiers import Identifier

StepStatus: TypeAlias = Literal["success", "failed"]


class RunStep(BaseModel):
    id: Optional[Identifier] = None
    tenant_id: Optional[Identifier] = None
    run_id: Optional[Identifier] = None
    chain_node_id: Optional[Identifier] = None
    provider_credential_id: Optional[Identifier] = None
    order_index: int = 0
    request_payload: dict[str, Any] = Field(default_factory=dict)
    response_raw: dict[str, Any] = Field(default_factory=dict)
    response_content: Optional[str] = None
    parsed_output: Any = None
    validation_errors: list[str] = Field(default_factory=list)
    status: StepStatus = "success"
    tokens_in: Optional[int] = None
    tokens_out: Optional[int] = None
    duration_ms: int = 0
    retry_count: Optional[int] = None
    retry_reasons: Optional[list[str]] = None
