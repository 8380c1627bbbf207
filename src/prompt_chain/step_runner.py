"""Sequential execution of the nodes of one run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable

from prompt_chain.exceptions import MissingCredentialError
from prompt_chain.llm.service import LlmService
from prompt_chain.message_builder import MessageBuilder
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.prompt_version_lookup import PromptVersionLookup
from prompt_chain.models.run import Run
from prompt_chain.models.run_step import StepStatus
from prompt_chain.models.step_output import StepOutput
from prompt_chain.recorder import RunStepRecorder
from prompt_chain.schema_validator import SchemaValidator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepRunResult:
    total_tokens_in: int
    total_tokens_out: int
    failed: bool


class RunStepRunner:
    def __init__(
        self,
        llm_service: LlmService,
        message_builder: MessageBuilder,
        schema_validator: SchemaValidator,
        recorder: RunStepRecorder,
    ) -> None:
        self._llm_service: LlmService = llm_service
        self._message_builder: MessageBuilder = message_builder
        self._schema_validator: SchemaValidator = schema_validator
        self._recorder: RunStepRecorder = recorder

    def run_steps(
        self,
        run: Run,
        nodes: Iterable[ChainNode],
        prompt_versions: PromptVersionLookup,
    ) -> StepRunResult:
        step_outputs: dict[str, StepOutput] = {}
        total_tokens_in = 0
        total_tokens_out = 0
        failed = False

        for node in nodes:
            step_start = time.perf_counter()
            messages = self._message_builder.build(node, prompt_versions, run.input, step_outputs)
            params: dict[str, Any] = dict(node.model_params)

            response: LlmResponse | None = None
            parsed_output: Any = None
            validation_errors: list[str] = []
            status: StepStatus = "success"

            try:
                credential = node.provider_credential
                if credential is None:
                    raise MissingCredentialError(f"Provider credential is missing for node {node.id}")

                response = self._llm_service.call(credential, node.model_name, messages, params)
                parsed_output, validation_errors = self._schema_validator.parse_and_validate(
                    response.content,
                    node.output_schema,
                )
                # Without stop_on_validation_error the errors are kept but the step still succeeds.
                if validation_errors and node.stop_on_validation_error:
                    status = "failed"
                    failed = True
            except Exception as exc:
                logger.error(
                    "Step failed for run %s node %s (%s, provider=%s, model=%s, roles=%s): %s",
                    run.id,
                    node.id,
                    node.name,
                    node.provider_credential.provider if node.provider_credential else None,
                    node.model_name,
                    [message["role"] for message in messages],
                    exc,
                )
                validation_errors = [*validation_errors, f"LLM call failed: {exc}"]
                status = "failed"
                failed = True

            duration_ms = int((time.perf_counter() - step_start) * 1000)
            if response is not None:
                total_tokens_in += response.tokens_in or 0
                total_tokens_out += response.tokens_out or 0

            self._recorder.record(
                run,
                node,
                messages,
                params,
                response,
                parsed_output,
                validation_errors,
                status,
                duration_ms,
            )

            step_outputs[node.step_key()] = StepOutput(
                parsed_output=parsed_output,
                raw_output=response.content if response is not None else None,
                response_raw=response.raw if response is not None else None,
            )

            if failed:
                break

        return StepRunResult(
            total_tokens_in=total_tokens_in,
            total_tokens_out=total_tokens_out,
            failed=failed,
        )
