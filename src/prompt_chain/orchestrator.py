"""Wires the default engine components around a repository."""

from __future__ import annotations

from typing import Any

from prompt_chain.llm.service import LlmService
from prompt_chain.message_builder import MessageBuilder
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.models.run import Run
from prompt_chain.prompt_runs import PromptRunFactory, RerunFactory
from prompt_chain.prompt_versions import PromptVersionResolver
from prompt_chain.recorder import RunStepRecorder
from prompt_chain.repository import RunRepository
from prompt_chain.run_executor import RunExecutor
from prompt_chain.schema_validator import SchemaValidator
from prompt_chain.snapshot import ChainSnapshotLoader
from prompt_chain.step_runner import RunStepRunner
from prompt_chain.variable_resolver import VariableResolver


class Orchestrator:
    def __init__(
        self,
        repository: RunRepository,
        llm_service: LlmService | None = None,
    ) -> None:
        self.repository: RunRepository = repository
        self.llm_service: LlmService = llm_service or LlmService()
        self.snapshot_loader: ChainSnapshotLoader = ChainSnapshotLoader(repository)
        self.prompt_version_resolver: PromptVersionResolver = PromptVersionResolver(repository)
        self.step_runner: RunStepRunner = RunStepRunner(
            self.llm_service,
            MessageBuilder(VariableResolver()),
            SchemaValidator(),
            RunStepRecorder(repository),
        )
        self.executor: RunExecutor = RunExecutor(
            repository,
            self.snapshot_loader,
            self.prompt_version_resolver,
            self.step_runner,
        )
        self.prompt_runs: PromptRunFactory = PromptRunFactory(repository, self.snapshot_loader)
        self.reruns: RerunFactory = RerunFactory(repository, self.snapshot_loader)

    def execute(self, run: Run) -> Run:
        return self.executor.execute(run)

    def run_chain(
        self,
        chain_id: Identifier,
        input_data: dict[str, Any],
        *,
        tenant_id: Identifier | None = None,
        project_id: Identifier | None = None,
    ) -> Run:
        run = self.repository.create_run(
            Run(tenant_id=tenant_id, project_id=project_id, chain_id=chain_id, input=dict(input_data))
        )
        return self.execute(run)

    def run_prompt_template(
        self,
        template_id: Identifier,
        credential: ProviderCredential,
        model_name: str,
        variables: dict[str, Any],
        *,
        tenant_id: Identifier | None = None,
        project_id: Identifier | None = None,
    ) -> Run:
        run = self.prompt_runs.create_run(
            template_id,
            credential,
            model_name,
            variables,
            tenant_id=tenant_id,
            project_id=project_id,
        )
        return self.execute(run)

    def rerun(self, run: Run) -> Run:
        return self.execute(self.reruns.rerun(run))
