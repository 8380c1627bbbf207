"""Routes provider calls to the client registered for a credential's provider."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from prompt_chain.exceptions import UnsupportedProviderError
from prompt_chain.llm.base import LlmProviderClient, ModelInfo
from prompt_chain.llm.pydantic_ai_client import PydanticAiProviderClient
from prompt_chain.llm.stub import StubProviderClient
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.provider_credential import ProviderCredential


def default_clients() -> dict[str, LlmProviderClient]:
    remote = PydanticAiProviderClient()
    return {
        "openai": remote,
        "openrouter": remote,
        "anthropic": remote,
        "google": remote,
        "stub": StubProviderClient(),
    }


class LlmService:
    def __init__(self, clients: Mapping[str, LlmProviderClient] | None = None) -> None:
        self._clients: dict[str, LlmProviderClient] = dict(clients) if clients is not None else default_clients()

    def client_for(self, credential: ProviderCredential) -> LlmProviderClient:
        client = self._clients.get(credential.provider)
        if client is None:
            raise UnsupportedProviderError(f"Unsupported provider: {credential.provider}")
        return client

    def call(
        self,
        credential: ProviderCredential,
        model_name: str,
        messages: Sequence[ChatMessage],
        params: dict[str, Any] | None = None,
    ) -> LlmResponse:
        return self.client_for(credential).call(credential, model_name, messages, params or {})

    def list_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        return self.client_for(credential).list_models(credential)
