from typing import Any, Sequence

import pytest

from prompt_chain.llm.base import LlmProviderClient, ModelInfo
from prompt_chain.llm.service import LlmService
from prompt_chain.models import ChatMessage
from prompt_chain.models import LlmResponse
from prompt_chain.models import PromptTemplate
from prompt_chain.models import PromptVersion
from prompt_chain.models import ProviderCredential
from prompt_chain.repository import InMemoryRepository


class ScriptedClient(LlmProviderClient):
    """Returns queued responses in order and records every call."""

    def __init__(self, responses: list[LlmResponse | Exception] | None = None) -> None:
        self.responses: list[LlmResponse | Exception] = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def call(
        self,
        credential: ProviderCredential,
        model_name: str,
        messages: Sequence[ChatMessage],
        params: dict[str, Any] | None = None,
    ) -> LlmResponse:
        self.calls.append(
            {
                "credential_id": credential.id,
                "model_name": model_name,
                "messages": [dict(message) for message in messages],
                "params": params,
            }
        )
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def list_models(self, credential: ProviderCredential) -> list[ModelInfo]:
        return []


@pytest.fixture
def client() -> ScriptedClient:
    return ScriptedClient()


@pytest.fixture
def llm_service(client: ScriptedClient) -> LlmService:
    return LlmService(clients={"scripted": client})


@pytest.fixture
def credential() -> ProviderCredential:
    return ProviderCredential(id="cred", provider="scripted", name="Scripted")


@pytest.fixture
def repository(credential: ProviderCredential) -> InMemoryRepository:
    repo = InMemoryRepository()
    repo.add_credential(credential)
    return repo


def add_prompt(
    repository: InMemoryRepository,
    template_id: str,
    versions: list[str],
    variables: list[str],
    tenant_id: Any = None,
) -> list[PromptVersion]:
    template = repository.add_template(
        PromptTemplate(id=template_id, name=template_id, variables=list(variables)),
        tenant_id,
    )
    return [
        repository.add_version(
            PromptVersion(
                id=f"{template_id}@{number}",
                prompt_template_id=template.id,
                version=number,
                content=content,
            ),
            tenant_id,
        )
        for number, content in enumerate(versions, start=1)
    ]
