"""Writes one RunStep record per visited node."""

from __future__ import annotations

from typing import Any

from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.run import Run
from prompt_chain.models.run_step import RunStep, StepStatus
from prompt_chain.repository import RunRepository


class RunStepRecorder:
    def __init__(self, repository: RunRepository) -> None:
        self._repository: RunRepository = repository

    def record(
        self,
        run: Run,
        node: ChainNode,
        messages: list[ChatMessage],
        params: dict[str, Any],
        response: LlmResponse | None,
        parsed_output: Any,
        validation_errors: list[str],
        status: StepStatus,
        duration_ms: int,
    ) -> RunStep:
        meta = response.meta if response is not None else {}
        step = RunStep(
            tenant_id=run.tenant_id,
            run_id=run.id,
            chain_node_id=node.id,
            provider_credential_id=node.provider_credential_id,
            order_index=node.order_index,
            request_payload={
                "model": node.model_name,
                "params": params,
                "messages": [dict(message) for message in messages],
            },
            response_raw=response.raw if response is not None else {},
            response_content=response.content if response is not None else None,
            parsed_output=parsed_output,
            validation_errors=list(validation_errors),
            status=status,
            tokens_in=response.tokens_in if response is not None else None,
            tokens_out=response.tokens_out if response is not None else None,
            duration_ms=duration_ms,
            retry_count=meta.get("retry_count"),
            retry_reasons=meta.get("retry_reasons"),
        )
        return self._repository.create_run_step(step)
