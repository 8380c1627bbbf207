"""Frozen copies of chain node definitions for a run."""

from __future__ import annotations

from typing import Any

from prompt_chain.models.chain import Chain
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.message_spec import TemplateMessage
from prompt_chain.models.run import Run
from prompt_chain.prompt_versions import latest_by_template
from prompt_chain.repository import RunRepository

SNAPSHOT_FIELDS = {
    "id",
    "name",
    "provider_credential_id",
    "model_name",
    "model_params",
    "messages_config",
    "output_schema",
    "stop_on_validation_error",
    "order_index",
}


class ChainSnapshotLoader:
    def __init__(self, repository: RunRepository) -> None:
        self._repository: RunRepository = repository

    def load(self, run: Run) -> list[ChainNode]:
        """
        Hydrate nodes from the run's snapshot. A run without one snapshots its
        live chain once and keeps that copy for good.
        """
        snapshot = list(run.chain_snapshot or [])

        if not snapshot and run.chain_id is not None:
            chain = self._repository.get_chain(run.tenant_id, run.chain_id)
            if chain is not None:
                snapshot = self.create_snapshot(chain, tenant_id=run.tenant_id)
                run.chain_snapshot = snapshot
                self._repository.save_run(run)

        credential_ids = list(
            dict.fromkeys(data["provider_credential_id"] for data in snapshot if data.get("provider_credential_id") is not None)
        )
        credentials = self._repository.get_provider_credentials(run.tenant_id, credential_ids) if credential_ids else {}

        nodes: list[ChainNode] = []
        for data in snapshot:
            node = ChainNode.model_validate(data)
            if node.provider_credential_id is not None:
                node.provider_credential = credentials.get(node.provider_credential_id)
            nodes.append(node)
        return sorted(nodes, key=lambda node: node.order_index)

    def create_snapshot(self, chain: Chain, tenant_id: Identifier | None = None) -> list[dict[str, Any]]:
        nodes = chain.ordered_nodes()
        latest_versions = self._latest_versions(nodes, tenant_id)
        return [self._snapshot_node(node, latest_versions) for node in nodes]

    def _snapshot_node(self, node: ChainNode, latest_versions: dict[Identifier, Identifier]) -> dict[str, Any]:
        messages = []
        for config in node.messages_config:
            # Pin template messages to the version that is latest right now.
            # Messages with an unrecognised mode are left unpinned.
            if (
                isinstance(config, TemplateMessage)
                and config.mode == "template"
                and not config.prompt_version_id
                and config.prompt_template_id
            ):
                config = config.model_copy(
                    update={"prompt_version_id": latest_versions.get(config.prompt_template_id)}
                )
            messages.append(config)
        pinned = node.model_copy(update={"messages_config": messages})
        return pinned.model_dump(mode="json", include=SNAPSHOT_FIELDS)

    def _latest_versions(self, nodes: list[ChainNode], tenant_id: Identifier | None) -> dict[Identifier, Identifier]:
        template_ids = list(
            dict.fromkeys(
                config.prompt_template_id
                for node in nodes
                for config in node.messages_config
                if isinstance(config, TemplateMessage) and config.prompt_template_id
            )
        )
        if not template_ids:
            return {}
        versions = self._repository.find_prompt_versions(tenant_id, template_ids=template_ids)
        return {template_id: version.id for template_id, version in latest_by_template(versions).items()}
