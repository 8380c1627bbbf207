"""Persistence boundary used by the engine, plus an in-memory implementation."""

from __future__ import annotations

from itertools import count
from typing import Iterable

from prompt_chain.models.chain import Chain
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.prompt_version import PromptTemplate, PromptVersion
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.models.run import Run
from prompt_chain.models.run_step import RunStep


class RunRepository:
    """
    Storage the engine reads chains, credentials and prompt versions from and
    records runs and steps into. Every lookup is scoped by an explicit tenant id.
    """

    def get_chain(self, tenant_id: Identifier | None, chain_id: Identifier) -> Chain | None:
        raise NotImplementedError("RunRepository.get_chain must be implemented by subclasses.")

    def create_chain(self, tenant_id: Identifier | None, chain: Chain) -> Chain:
        raise NotImplementedError("RunRepository.create_chain must be implemented by subclasses.")

    def get_provider_credentials(
        self,
        tenant_id: Identifier | None,
        credential_ids: Iterable[Identifier],
    ) -> dict[Identifier, ProviderCredential]:
        raise NotImplementedError("RunRepository.get_provider_credentials must be implemented by subclasses.")

    def find_prompt_versions(
        self,
        tenant_id: Identifier | None,
        *,
        version_ids: Iterable[Identifier] = (),
        template_ids: Iterable[Identifier] = (),
    ) -> list[PromptVersion]:
        """Versions matching any explicit id or belonging to any listed template."""
        raise NotImplementedError("RunRepository.find_prompt_versions must be implemented by subclasses.")

    def create_run(self, run: Run) -> Run:
        raise NotImplementedError("RunRepository.create_run must be implemented by subclasses.")

    def save_run(self, run: Run) -> Run:
        raise NotImplementedError("RunRepository.save_run must be implemented by subclasses.")

    def get_run(self, tenant_id: Identifier | None, run_id: Identifier) -> Run | None:
        raise NotImplementedError("RunRepository.get_run must be implemented by subclasses.")

    def create_run_step(self, step: RunStep) -> RunStep:
        raise NotImplementedError("RunRepository.create_run_step must be implemented by subclasses.")

    def list_run_steps(self, tenant_id: Identifier | None, run_id: Identifier) -> list[RunStep]:
        raise NotImplementedError("RunRepository.list_run_steps must be implemented by subclasses.")


class InMemoryRepository(RunRepository):
    def __init__(self) -> None:
        self._chains: dict[Identifier | None, dict[Identifier, Chain]] = {}
        self._credentials: dict[Identifier | None, dict[Identifier, ProviderCredential]] = {}
        self._templates: dict[Identifier | None, dict[Identifier, PromptTemplate]] = {}
        self._versions: dict[Identifier | None, dict[Identifier, PromptVersion]] = {}
        self._runs: dict[Identifier | None, dict[Identifier, Run]] = {}
        self._steps: list[RunStep] = []
        self._ids = count(1)

    def _next_id(self) -> int:
        return next(self._ids)

    def add_chain(self, chain: Chain, tenant_id: Identifier | None = None) -> Chain:
        self._chains.setdefault(tenant_id, {})[chain.id] = chain
        return chain

    def add_credential(self, credential: ProviderCredential, tenant_id: Identifier | None = None) -> ProviderCredential:
        self._credentials.setdefault(tenant_id, {})[credential.id] = credential
        return credential

    def add_template(self, template: PromptTemplate, tenant_id: Identifier | None = None) -> PromptTemplate:
        self._templates.setdefault(tenant_id, {})[template.id] = template
        return template

    def add_version(self, version: PromptVersion, tenant_id: Identifier | None = None) -> PromptVersion:
        self._versions.setdefault(tenant_id, {})[version.id] = version
        return version

    def get_chain(self, tenant_id: Identifier | None, chain_id: Identifier) -> Chain | None:
        return self._chains.get(tenant_id, {}).get(chain_id)

    def create_chain(self, tenant_id: Identifier | None, chain: Chain) -> Chain:
        return self.add_chain(chain, tenant_id)

    def get_provider_credentials(
        self,
        tenant_id: Identifier | None,
        credential_ids: Iterable[Identifier],
    ) -> dict[Identifier, ProviderCredential]:
        stored = self._credentials.get(tenant_id, {})
        return {credential_id: stored[credential_id] for credential_id in credential_ids if credential_id in stored}

    def find_prompt_versions(
        self,
        tenant_id: Identifier | None,
        *,
        version_ids: Iterable[Identifier] = (),
        template_ids: Iterable[Identifier] = (),
    ) -> list[PromptVersion]:
        wanted_versions = set(version_ids)
        wanted_templates = set(template_ids)
        templates = self._templates.get(tenant_id, {})
        found: list[PromptVersion] = []
        for version in self._versions.get(tenant_id, {}).values():
            if version.id not in wanted_versions and version.prompt_template_id not in wanted_templates:
                continue
            if version.template is None and version.prompt_template_id in templates:
                version = version.model_copy(update={"template": templates[version.prompt_template_id]})
            found.append(version)
        return found

    def create_run(self, run: Run) -> Run:
        if run.id is None:
            run.id = self._next_id()
        return self.save_run(run)

    def save_run(self, run: Run) -> Run:
        if run.id is None:
            run.id = self._next_id()
        self._runs.setdefault(run.tenant_id, {})[run.id] = run
        return run

    def get_run(self, tenant_id: Identifier | None, run_id: Identifier) -> Run | None:
        return self._runs.get(tenant_id, {}).get(run_id)

    def create_run_step(self, step: RunStep) -> RunStep:
        if step.id is None:
            step.id = self._next_id()
        self._steps.append(step)
        return step

    def list_run_steps(self, tenant_id: Identifier | None, run_id: Identifier) -> list[RunStep]:
        steps = [step for step in self._steps if step.tenant_id == tenant_id and step.run_id == run_id]
        return sorted(steps, key=lambda step: step.order_index)
