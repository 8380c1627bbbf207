"""Cached per-credential model catalog."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Sequence

from prompt_chain.llm.base import ModelInfo
from prompt_chain.llm.defaults import DEFAULT_MODELS
from prompt_chain.llm.service import LlmService
from prompt_chain.models.provider_credential import ProviderCredential


logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 600.0


def normalize_models(models: Sequence[Mapping[str, Any]]) -> list[ModelInfo]:
    normalized: list[ModelInfo] = []
    for model in models:
        model_id = str(model.get("id") or model.get("name") or "")
        name = str(model.get("name") or model_id)
        display_name = str(model.get("display_name") or name)
        normalized.append({"id": model_id, "name": name, "display_name": display_name})
    return normalized


class ModelCatalog:
    def __init__(
        self,
        llm_service: LlmService,
        *,
        defaults: Mapping[str, list[ModelInfo]] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._llm_service: LlmService = llm_service
        self._defaults: Mapping[str, list[ModelInfo]] = defaults if defaults is not None else DEFAULT_MODELS
        self._clock = clock
        self._cache: dict[str, tuple[float, list[ModelInfo]]] = {}

    def get_models_for(self, credential: ProviderCredential) -> list[ModelInfo]:
        """
        Models offered by the credential's provider, cached for ten minutes.
        Falls back to the configured defaults when listing fails or returns nothing.
        """
        cache_key = f"{credential.provider}:{credential.id}"
        now = self._clock()
        cached = self._cache.get(cache_key)
        if cached is not None and now - cached[0] < CACHE_TTL_SECONDS:
            return cached[1]

        models: Sequence[Mapping[str, Any]]
        try:
            models = self._llm_service.list_models(credential)
        except Exception as exc:
            logger.warning(
                "Listing models failed for provider %s credential %s: %s",
                credential.provider,
                credential.id,
                exc,
            )
            models = []

        if not models:
            models = self._defaults.get(credential.provider, [])

        normalized = normalize_models(models)
        self._cache[cache_key] = (now, normalized)
        return normalized
