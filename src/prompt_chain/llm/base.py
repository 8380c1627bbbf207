"""Provider client interface."""

from __future__ import annotations

from typing import Any, Sequence, TypedDict

from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.provider_credential import ProviderCredential


class ModelInfo(TypedDict):
    id: str
    name: str
    display_name: str


class LlmProviderClient:
    def call(
        self,
        credential: ProviderCredential,
        model_name: str,
        messages: Sequence[ChatMessage],
        params: dict[str, Any] | None = None,
    ) -> LlmResponse:
        raise NotImplementedError("LlmProviderClient.call must be implemented by subclasses.")

    def list_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        raise NotImplementedError("LlmProviderClient.list_models must be implemented by subclasses.")
