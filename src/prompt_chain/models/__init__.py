"""Model types for chains, runs and provider configuration."""

from prompt_chain.models.chain import Chain
from prompt_chain.models.chain_file_spec import ChainFileSpec
from prompt_chain.models.chain_file_spec import ChainNodeDefinition
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.message_spec import InlineMessage
from prompt_chain.models.message_spec import MessageSpec
from prompt_chain.models.message_spec import TemplateMessage
from prompt_chain.models.prompt_version import PromptTemplate
from prompt_chain.models.prompt_version import PromptVersion
from prompt_chain.models.prompt_version_lookup import PromptVersionLookup
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.models.run import Run
from prompt_chain.models.run_step import RunStep
from prompt_chain.models.schema_node import ArraySchema
from prompt_chain.models.schema_node import BooleanSchema
from prompt_chain.models.schema_node import EnumSchema
from prompt_chain.models.schema_node import NumberSchema
from prompt_chain.models.schema_node import ObjectSchema
from prompt_chain.models.schema_node import SchemaNode
from prompt_chain.models.schema_node import StringSchema
from prompt_chain.models.step_output import StepOutput
from prompt_chain.models.variable_mapping import ConstantMapping
from prompt_chain.models.variable_mapping import InputMapping
from prompt_chain.models.variable_mapping import PreviousStepMapping
from prompt_chain.models.variable_mapping import VariableMapping

__all__ = [
    "ArraySchema",
    "BooleanSchema",
    "Chain",
    "ChainFileSpec",
    "ChainNode",
    "ChainNodeDefinition",
    "ChatMessage",
    "ConstantMapping",
    "EnumSchema",
    "Identifier",
    "InlineMessage",
    "InputMapping",
    "LlmResponse",
    "MessageSpec",
    "NumberSchema",
    "ObjectSchema",
    "PreviousStepMapping",
    "PromptTemplate",
    "PromptVersion",
    "PromptVersionLookup",
    "ProviderCredential",
    "Run",
    "RunStep",
    "SchemaNode",
    "StepOutput",
    "StringSchema",
    "TemplateMessage",
    "VariableMapping",
]
