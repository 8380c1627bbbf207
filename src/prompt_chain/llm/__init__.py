"""LLM provider clients."""

from prompt_chain.llm.base import LlmProviderClient
from prompt_chain.llm.base import ModelInfo
from prompt_chain.llm.catalog import ModelCatalog
from prompt_chain.llm.pydantic_ai_client import PydanticAiProviderClient
from prompt_chain.llm.service import LlmService
from prompt_chain.llm.stub import StubProviderClient

__all__ = [
    "LlmProviderClient",
    "LlmService",
    "ModelCatalog",
    "ModelInfo",
    "PydanticAiProviderClient",
    "StubProviderClient",
]
