"""Creation of pending runs for single prompts and for reruns."""

from __future__ import annotations

from typing import Any

from prompt_chain.models.chain import Chain
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.message_spec import TemplateMessage
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.models.run import Run
from prompt_chain.prompt_versions import latest_by_template
from prompt_chain.repository import RunRepository
from prompt_chain.snapshot import ChainSnapshotLoader


class PromptRunFactory:
    """Wraps one prompt template into a single-node chain and a pending run."""

    def __init__(self, repository: RunRepository, snapshot_loader: ChainSnapshotLoader) -> None:
        self._repository: RunRepository = repository
        self._snapshot_loader: ChainSnapshotLoader = snapshot_loader

    def create_run(
        self,
        template_id: Identifier,
        credential: ProviderCredential,
        model_name: str,
        variables: dict[str, Any],
        *,
        tenant_id: Identifier | None = None,
        project_id: Identifier | None = None,
    ) -> Run:
        versions = self._repository.find_prompt_versions(tenant_id, template_ids=[template_id])
        latest = latest_by_template(versions).get(template_id)
        if latest is None:
            raise LookupError(f"Prompt template {template_id!r} has no versions.")

        template_name = latest.template.name if latest.template and latest.template.name else str(template_id)
        node = ChainNode(
            id=f"prompt-{template_id}-{latest.id}",
            name=template_name,
            order_index=1,
            provider_credential_id=credential.id,
            model_name=model_name,
            messages_config=[TemplateMessage(role="user", prompt_version_id=latest.id)],
        )
        chain = self._repository.create_chain(
            tenant_id,
            Chain(
                id=f"prompt-{template_id}-{latest.id}",
                project_id=project_id,
                name=f"Prompt: {template_name}",
                description="Quick prompt run",
                is_quick_prompt=True,
                nodes=[node],
            ),
        )
        return self._repository.create_run(
            Run(
                tenant_id=tenant_id,
                project_id=project_id,
                chain_id=chain.id,
                input=dict(variables),
                chain_snapshot=self._snapshot_loader.create_snapshot(chain, tenant_id=tenant_id),
            )
        )


class RerunFactory:
    """Creates a pending copy of a run that reuses its frozen snapshot."""

    def __init__(self, repository: RunRepository, snapshot_loader: ChainSnapshotLoader) -> None:
        self._repository: RunRepository = repository
        self._snapshot_loader: ChainSnapshotLoader = snapshot_loader

    def rerun(self, run: Run) -> Run:
        snapshot = list(run.chain_snapshot)
        if not snapshot:
            chain = self._repository.get_chain(run.tenant_id, run.chain_id) if run.chain_id is not None else None
            if chain is None:
                raise LookupError(f"Run {run.id!r} has no snapshot and no chain to snapshot.")
            snapshot = self._snapshot_loader.create_snapshot(chain, tenant_id=run.tenant_id)

        return self._repository.create_run(
            Run(
                tenant_id=run.tenant_id,
                project_id=run.project_id,
                chain_id=run.chain_id,
                input=dict(run.input),
                chain_snapshot=snapshot,
            )
        )
