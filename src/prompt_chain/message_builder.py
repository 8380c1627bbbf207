"""Builds the chat messages sent for one chain node."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.message_spec import InlineMessage, TemplateMessage
from prompt_chain.models.prompt_version_lookup import PromptVersionLookup
from prompt_chain.models.step_output import StepOutput
from prompt_chain.prompting import extract_variables, render_template
from prompt_chain.variable_resolver import VariableResolver


logger = logging.getLogger(__name__)


class MessageBuilder:
    def __init__(self, variable_resolver: VariableResolver | None = None) -> None:
        self._variable_resolver: VariableResolver = variable_resolver or VariableResolver()

    def build(
        self,
        node: ChainNode,
        prompt_versions: PromptVersionLookup,
        input_data: Mapping[str, Any],
        step_outputs: Mapping[str, StepOutput | Mapping[str, Any]],
    ) -> list[ChatMessage]:
        return [
            self._build_message(node, config, prompt_versions, input_data, step_outputs)
            for config in node.messages_config
        ]

    def _build_message(
        self,
        node: ChainNode,
        config: TemplateMessage | InlineMessage,
        prompt_versions: PromptVersionLookup,
        input_data: Mapping[str, Any],
        step_outputs: Mapping[str, StepOutput | Mapping[str, Any]],
    ) -> ChatMessage:
        if isinstance(config, InlineMessage):
            content = config.inline_content
            template_variables: list[Any] = list(extract_variables(content))
        else:
            version = prompt_versions.find(config.prompt_version_id, config.prompt_template_id)
            if version is None:
                logger.warning(
                    "Prompt version not found for node %s (prompt_version_id=%s, prompt_template_id=%s)",
                    node.id,
                    config.prompt_version_id,
                    config.prompt_template_id,
                )
                content = ""
                template_variables = []
            else:
                content = version.content
                template_variables = version.declared_variables()

        resolved = self._variable_resolver.resolve(
            template_variables,
            config.variables,
            input_data,
            step_outputs,
        )
        return {"role": config.role, "content": render_template(content, resolved)}
