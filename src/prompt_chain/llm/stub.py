"""Offline provider client that echoes its input."""

from __future__ import annotations

from typing import Any, Sequence

from prompt_chain.llm.base import LlmProviderClient, ModelInfo
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.provider_credential import ProviderCredential


class StubProviderClient(LlmProviderClient):
    def call(
        self,
        credential: ProviderCredential,
        model_name: str,
        messages: Sequence[ChatMessage],
        params: dict[str, Any] | None = None,
    ) -> LlmResponse:
        joined = "\n".join(f"{message.get('role', 'user')}: {message.get('content', '')}" for message in messages)
        content = f"Stub response from {credential.provider} ({model_name}).\nInput:\n{joined}"
        return LlmResponse(content=content, usage={"tokens_in": None, "tokens_out": None})

    def list_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        return []
