"""Provider client backed by pydantic-ai models."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic_ai.direct import model_request_sync
from pydantic_ai.messages import (
    ModelMessage,
    ModelMessagesTypeAdapter,
    ModelRequest,
    ModelRequestPart,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from prompt_chain.exceptions import ProviderCallError, UnsupportedProviderError
from prompt_chain.llm.base import LlmProviderClient, ModelInfo
from prompt_chain.llm.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MAX_TOKENS, DEFAULT_BASE_URLS
from prompt_chain.models.chat_message import ChatMessage
from prompt_chain.models.llm_response import LlmResponse
from prompt_chain.models.provider_credential import ProviderCredential


logger = logging.getLogger(__name__)

OPENAI_COMPATIBLE = ("openai", "openrouter")

SETTINGS_KEYS = (
    "max_tokens",
    "temperature",
    "top_p",
    "timeout",
    "seed",
    "presence_penalty",
    "frequency_penalty",
    "logit_bias",
    "stop_sequences",
    "extra_headers",
)

PROVIDER_LABELS = {
    "openai": "OpenAI",
    "openrouter": "OpenRouter",
    "anthropic": "Anthropic",
    "google": "Gemini",
}


def provider_label(provider: str) -> str:
    return PROVIDER_LABELS.get(provider, provider)


def build_model(credential: ProviderCredential, model_name: str) -> Model:
    api_key = credential.resolve_api_key()
    provider = credential.provider

    if provider in OPENAI_COMPATIBLE:
        base_url = credential.base_url or DEFAULT_BASE_URLS[provider]
        return OpenAIChatModel(model_name, provider=OpenAIProvider(base_url=base_url, api_key=api_key))

    if provider == "anthropic":
        from pydantic_ai.models.anthropic import AnthropicModel
        from pydantic_ai.providers.anthropic import AnthropicProvider

        return AnthropicModel(model_name, provider=AnthropicProvider(api_key=api_key))

    if provider == "google":
        from pydantic_ai.models.google import GoogleModel
        from pydantic_ai.providers.google import GoogleProvider

        return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))

    raise UnsupportedProviderError(f"Unsupported provider: {provider}")


def to_model_messages(messages: Sequence[ChatMessage]) -> list[ModelMessage]:
    """
    Convert role/content messages into pydantic-ai history.
    Consecutive system and user messages share one request; assistant messages become responses.
    """
    history: list[ModelMessage] = []
    pending: list[ModelRequestPart] = []
    for message in messages:
        role = message.get("role", "user")
        content = message.get("content", "")
        if role == "assistant":
            if pending:
                history.append(ModelRequest(parts=pending))
                pending = []
            history.append(ModelResponse(parts=[TextPart(content=content)]))
        elif role == "system":
            pending.append(SystemPromptPart(content=content))
        else:
            pending.append(UserPromptPart(content=content))
    if pending:
        history.append(ModelRequest(parts=pending))
    return history


def build_model_settings(provider: str, params: dict[str, Any]) -> ModelSettings:
    settings: dict[str, Any] = {key: params[key] for key in SETTINGS_KEYS if key in params}
    extra_body = {key: value for key, value in params.items() if key not in SETTINGS_KEYS}
    if extra_body:
        settings["extra_body"] = extra_body

    if provider == "anthropic":
        max_tokens = settings.get("max_tokens")
        if not isinstance(max_tokens, (int, float)) or isinstance(max_tokens, bool) or max_tokens <= 0:
            settings["max_tokens"] = ANTHROPIC_DEFAULT_MAX_TOKENS
    return ModelSettings(**settings)


def response_text(response: ModelResponse) -> str:
    return "".join(part.content for part in response.parts if isinstance(part, TextPart))


class PydanticAiProviderClient(LlmProviderClient):
    def __init__(self, http_client: httpx.Client | None = None) -> None:
        self._http_client: httpx.Client | None = http_client

    def call(
        self,
        credential: ProviderCredential,
        model_name: str,
        messages: Sequence[ChatMessage],
        params: dict[str, Any] | None = None,
    ) -> LlmResponse:
        model = build_model(credential, model_name)
        settings = build_model_settings(credential.provider, params or {})
        label = provider_label(credential.provider)

        try:
            response = model_request_sync(model, to_model_messages(messages), model_settings=settings)
        except Exception as exc:
            raise ProviderCallError(f"{label} call failed: {exc}") from exc

        if not response.parts:
            logger.warning(
                "%s response for credential %s model %s had no parts",
                label,
                credential.id,
                model_name,
            )

        raw = ModelMessagesTypeAdapter.dump_python([response], mode="json")[0]
        return LlmResponse(
            content=response_text(response),
            usage={
                "tokens_in": response.usage.input_tokens,
                "tokens_out": response.usage.output_tokens,
            },
            raw=raw,
            meta={},
        )

    def list_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        label = provider_label(credential.provider)
        try:
            if credential.provider in OPENAI_COMPATIBLE:
                return self._list_openai_models(credential)
            if credential.provider == "anthropic":
                return self._list_anthropic_models(credential)
            if credential.provider == "google":
                return self._list_google_models(credential)
        except httpx.HTTPError as exc:
            raise ProviderCallError(f"{label} list models failed: {exc}") from exc
        raise UnsupportedProviderError(f"Unsupported provider: {credential.provider}")

    def _get_json(self, url: str, *, headers: dict[str, str], params: dict[str, str] | None = None) -> dict[str, Any]:
        if self._http_client is not None:
            response = self._http_client.get(url, headers=headers, params=params)
        else:
            with httpx.Client(timeout=30.0) as client:
                response = client.get(url, headers=headers, params=params)
        response.raise_for_status()
        return response.json()

    def _base_url(self, credential: ProviderCredential) -> str:
        return (credential.base_url or DEFAULT_BASE_URLS[credential.provider]).rstrip("/")

    def _list_openai_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        payload = self._get_json(
            f"{self._base_url(credential)}/models",
            headers={"Authorization": f"Bearer {credential.resolve_api_key()}"},
        )
        models: list[ModelInfo] = []
        for item in payload.get("data") or []:
            model_id = str(item.get("id") or "")
            models.append({"id": model_id, "name": model_id, "display_name": model_id})
        return models

    def _list_anthropic_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        payload = self._get_json(
            f"{self._base_url(credential)}/models",
            headers={"x-api-key": credential.resolve_api_key(), "anthropic-version": ANTHROPIC_API_VERSION},
        )
        models: list[ModelInfo] = []
        for item in payload.get("data") or []:
            model_id = str(item.get("id") or "")
            models.append({"id": model_id, "name": model_id, "display_name": str(item.get("display_name") or model_id)})
        return models

    def _list_google_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        payload = self._get_json(
            f"{self._base_url(credential)}/models",
            headers={},
            params={"key": credential.resolve_api_key()},
        )
        models: list[ModelInfo] = []
        for item in payload.get("models") or []:
            model_id = str(item.get("name") or "").removeprefix("models/")
            models.append({"id": model_id, "name": model_id, "display_name": str(item.get("displayName") or model_id)})
        return models
