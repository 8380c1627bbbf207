"""Pydantic model for LLM provider credentials."""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, SecretStr

from prompt_chain.models.identifiers import Identifier


class ProviderCredential(BaseModel):
    id: Identifier
    provider: str  # "openai", "openrouter", "anthropic", "google" or "stub"
    name: str = ""
    api_key: Optional[SecretStr] = None
    api_key_env: Optional[str] = None
    base_url: Optional[str] = None

    def resolve_api_key(self) -> str:
        if self.api_key is not None:
            return self.api_key.get_secret_value()
        if self.api_key_env:
            return os.environ.get(self.api_key_env, "noop")
        return "noop"
