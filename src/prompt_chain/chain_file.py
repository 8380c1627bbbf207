"""Chain definitions loaded from markdown files with YAML frontmatter.

A chain file declares credentials and nodes in its frontmatter and defines
prompt templates as ``## prompt: <template_id>`` sections in the body::

    ---
    name: Article pipeline
    credentials:
      - id: openai
        provider: openai
        api_key_env: OPENAI_API_KEY
    nodes:
      - id: 1
        name: Outline
        provider_credential_id: openai
        model_name: gpt-4o-mini
        output_schema: "{ title: string; sections: string[] }"
        messages:
          - role: user
            prompt_template_id: outline
    ---

    ## prompt: outline

    Write an outline about {{ topic }} as JSON.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter

from prompt_chain.models.chain import Chain
from prompt_chain.models.chain_file_spec import ChainFileSpec, ChainNodeDefinition
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.prompt_version import PromptTemplate, PromptVersion
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.prompting import extract_variables
from prompt_chain.repository import InMemoryRepository
from prompt_chain.schema_parser import apply_schema_definition


logger = logging.getLogger(__name__)

SECTION_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$", re.MULTILINE)
TEMPLATE_ID_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class LoadedChainFile:
    spec: ChainFileSpec
    chain: Chain
    credentials: list[ProviderCredential] = field(default_factory=list)
    templates: list[PromptTemplate] = field(default_factory=list)
    versions: list[PromptVersion] = field(default_factory=list)

    def register(self, repository: InMemoryRepository, tenant_id: Identifier | None = None) -> Chain:
        for credential in self.credentials:
            repository.add_credential(credential, tenant_id)
        for template in self.templates:
            repository.add_template(template, tenant_id)
        for version in self.versions:
            repository.add_version(version, tenant_id)
        return repository.add_chain(self.chain, tenant_id)


def load_chain_frontmatter(source: Path | str) -> tuple[frontmatter.Post, str]:
    # Strings holding a whole document are parsed directly; anything else is a path.
    if isinstance(source, str) and ("\n" in source or source.lstrip().startswith("---")):
        return frontmatter.loads(source), "<inline>"
    source_path = Path(source)
    return frontmatter.load(str(source_path)), str(source_path)


def classify_section_header(header_text: str) -> str | None:
    if ":" not in header_text:
        return None
    prefix, template_id = header_text.split(":", 1)
    template_id = template_id.strip()
    if prefix.strip().lower() != "prompt" or not TEMPLATE_ID_RE.match(template_id):
        return None
    return template_id


def parse_prompt_sections(markdown_body: str, source_label: str = "<inline>") -> dict[str, str]:
    recognized: list[tuple[str, int, int]] = []
    for match in SECTION_HEADER_RE.finditer(markdown_body):
        template_id = classify_section_header(match.group(2))
        if template_id is not None:
            recognized.append((template_id, match.start(), match.end()))

    if recognized and markdown_body[: recognized[0][1]].strip():
        logger.warning("Ignored text before the first prompt section in %s", source_label)

    sections: dict[str, str] = {}
    for index, (template_id, _start, end) in enumerate(recognized):
        next_index = index + 1
        section_end = recognized[next_index][1] if next_index < len(recognized) else len(markdown_body)
        if template_id in sections:
            logger.warning("Duplicate prompt section %s in %s; keeping the first", template_id, source_label)
            continue
        sections[template_id] = markdown_body[end:section_end].strip()
    return sections


def build_node(definition: ChainNodeDefinition, position: int) -> ChainNode:
    node = ChainNode(
        id=definition.id,
        name=definition.name,
        order_index=definition.order_index if definition.order_index is not None else position,
        provider_credential_id=definition.provider_credential_id,
        model_name=definition.model_name,
        model_params=definition.model_params,
        messages_config=definition.messages,
        stop_on_validation_error=definition.stop_on_validation_error,
    )
    return apply_schema_definition(node, definition.output_schema)


def load_chain_file(source: Path | str) -> LoadedChainFile:
    post, source_label = load_chain_frontmatter(source)
    spec = ChainFileSpec.model_validate(post.metadata)
    sections = parse_prompt_sections(post.content, source_label)

    templates: list[PromptTemplate] = []
    versions: list[PromptVersion] = []
    for template_id, content in sections.items():
        template = PromptTemplate(id=template_id, name=template_id, variables=extract_variables(content))
        templates.append(template)
        versions.append(
            PromptVersion(
                id=f"{template_id}@1",
                prompt_template_id=template_id,
                version=1,
                content=content,
                template=template,
            )
        )

    nodes = [build_node(definition, position) for position, definition in enumerate(spec.nodes, start=1)]
    chain = Chain(id=spec.id, name=spec.name, description=spec.description, nodes=nodes)
    return LoadedChainFile(
        spec=spec,
        chain=chain,
        credentials=list(spec.credentials),
        templates=templates,
        versions=versions,
    )
