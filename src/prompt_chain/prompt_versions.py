"""Batch resolution of the prompt versions referenced by a set of nodes."""

from __future__ import annotations

from typing import Iterable

from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.message_spec import TemplateMessage
from prompt_chain.models.prompt_version import PromptVersion
from prompt_chain.models.prompt_version_lookup import PromptVersionLookup
from prompt_chain.repository import RunRepository


def latest_by_template(versions: Iterable[PromptVersion]) -> dict[Identifier, PromptVersion]:
    latest: dict[Identifier, PromptVersion] = {}
    for version in versions:
        current = latest.get(version.prompt_template_id)
        if current is None or version.version > current.version:
            latest[version.prompt_template_id] = version
    return latest


def referenced_ids(nodes: Iterable[ChainNode]) -> tuple[list[Identifier], list[Identifier]]:
    template_ids: list[Identifier] = []
    version_ids: list[Identifier] = []
    for node in nodes:
        for config in node.messages_config:
            if not isinstance(config, TemplateMessage):
                continue
            if config.prompt_template_id:
                template_ids.append(config.prompt_template_id)
            if config.prompt_version_id:
                version_ids.append(config.prompt_version_id)
    return list(dict.fromkeys(template_ids)), list(dict.fromkeys(version_ids))


class PromptVersionResolver:
    def __init__(self, repository: RunRepository) -> None:
        self._repository: RunRepository = repository

    def load_for_nodes(
        self,
        nodes: Iterable[ChainNode],
        tenant_id: Identifier | None = None,
    ) -> PromptVersionLookup:
        template_ids, version_ids = referenced_ids(nodes)
        if not template_ids and not version_ids:
            return PromptVersionLookup()

        versions = self._repository.find_prompt_versions(
            tenant_id,
            version_ids=version_ids,
            template_ids=template_ids,
        )
        return PromptVersionLookup(
            by_id={version.id: version for version in versions},
            by_template=latest_by_template(versions),
        )
