from typing import Any

from prompt_chain.llm.service import LlmService
from prompt_chain.message_builder import MessageBuilder
from prompt_chain.models import ChainNode
from prompt_chain.models import LlmResponse
from prompt_chain.models import PromptVersionLookup
from prompt_chain.models import ProviderCredential
from prompt_chain.models import Run
from prompt_chain.recorder import RunStepRecorder
from prompt_chain.repository import InMemoryRepository
from prompt_chain.schema_parser import apply_schema_definition
from prompt_chain.schema_validator import SchemaValidator
from prompt_chain.step_runner import RunStepRunner

from conftest import ScriptedClient


def make_runner(repository: InMemoryRepository, llm_service: LlmService) -> RunStepRunner:
    return RunStepRunner(llm_service, MessageBuilder(), SchemaValidator(), RunStepRecorder(repository))


def make_node(
    node_id: int,
    name: str,
    content: str,
    credential: ProviderCredential | None,
    *,
    schema: str | None = None,
    stop: bool = False,
    variables: dict[str, Any] | None = None,
) -> ChainNode:
    node = ChainNode.model_validate(
        {
            "id": node_id,
            "name": name,
            "order_index": node_id,
            "provider_credential_id": credential.id if credential else None,
            "model_name": "test-model",
            "model_params": {"temperature": 0.2},
            "messages_config": [{"mode": "inline", "inline_content": content, "variables": variables or {}}],
            "stop_on_validation_error": stop,
        }
    )
    node.provider_credential = credential
    return apply_schema_definition(node, schema)


def test_two_nodes_pass_output_forward(
    repository: InMemoryRepository,
    llm_service: LlmService,
    client: ScriptedClient,
    credential: ProviderCredential,
) -> None:
    client.responses = [
        LlmResponse(content='{"title": "Owls"}', usage={"tokens_in": 10, "tokens_out": 5}),
        LlmResponse(content="An essay.", usage={"prompt_tokens": 7, "completion_tokens": 3}),
    ]
    run = repository.create_run(Run(input={"topic": "birds"}))
    nodes = [
        make_node(1, "Outline", "Outline {{ topic }}", credential, schema="{ title: string }"),
        make_node(
            2,
            "Essay",
            "Write {{ title }}",
            credential,
            variables={"title": {"source": "previous_step", "step_key": "outline", "path": "title"}},
        ),
    ]

    result = make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    assert result.failed is False
    assert result.total_tokens_in == 17
    assert result.total_tokens_out == 8
    assert client.calls[0]["messages"] == [{"role": "user", "content": "Outline birds"}]
    assert client.calls[1]["messages"] == [{"role": "user", "content": "Write Owls"}]
    assert client.calls[0]["params"] == {"temperature": 0.2}

    steps = repository.list_run_steps(None, run.id)
    assert [step.chain_node_id for step in steps] == [1, 2]
    assert steps[0].parsed_output == {"title": "Owls"}
    assert steps[0].request_payload == {
        "model": "test-model",
        "params": {"temperature": 0.2},
        "messages": [{"role": "user", "content": "Outline birds"}],
    }
    assert steps[1].parsed_output is None
    assert steps[1].validation_errors == []
    assert steps[1].tokens_in == 7
    assert all(step.status == "success" for step in steps)


def test_validation_errors_are_soft_by_default(
    repository: InMemoryRepository,
    llm_service: LlmService,
    client: ScriptedClient,
    credential: ProviderCredential,
) -> None:
    client.responses = [LlmResponse(content='{"title": 1}'), LlmResponse(content="next")]
    run = repository.create_run(Run())
    nodes = [
        make_node(1, "First", "a", credential, schema="{ title: string }"),
        make_node(2, "Second", "b", credential),
    ]

    result = make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    steps = repository.list_run_steps(None, run.id)
    assert result.failed is False
    assert len(steps) == 2
    assert steps[0].status == "success"
    assert steps[0].validation_errors == ["response.title must be a string."]


def test_stop_on_validation_error_halts_the_run(
    repository: InMemoryRepository,
    llm_service: LlmService,
    client: ScriptedClient,
    credential: ProviderCredential,
) -> None:
    client.responses = [LlmResponse(content="not json"), LlmResponse(content="never")]
    run = repository.create_run(Run())
    nodes = [
        make_node(1, "First", "a", credential, schema="{ title: string }", stop=True),
        make_node(2, "Second", "b", credential),
    ]

    result = make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    steps = repository.list_run_steps(None, run.id)
    assert result.failed is True
    assert len(steps) == 1
    assert steps[0].status == "failed"
    assert steps[0].validation_errors == ["Response is not valid JSON"]
    assert len(client.calls) == 1


def test_provider_error_fails_step_and_stops(
    repository: InMemoryRepository,
    llm_service: LlmService,
    client: ScriptedClient,
    credential: ProviderCredential,
) -> None:
    client.responses = [RuntimeError("boom")]
    run = repository.create_run(Run())
    nodes = [make_node(1, "First", "a", credential), make_node(2, "Second", "b", credential)]

    result = make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    steps = repository.list_run_steps(None, run.id)
    assert result.failed is True
    assert len(steps) == 1
    assert steps[0].status == "failed"
    assert steps[0].validation_errors == ["LLM call failed: boom"]
    assert steps[0].response_content is None
    assert steps[0].tokens_in is None


def test_missing_credential_fails_step(repository: InMemoryRepository, llm_service: LlmService) -> None:
    run = repository.create_run(Run())
    nodes = [make_node(1, "First", "a", None)]

    result = make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    steps = repository.list_run_steps(None, run.id)
    assert result.failed is True
    assert steps[0].validation_errors == ["LLM call failed: Provider credential is missing for node 1"]


def test_unsupported_provider_fails_step(repository: InMemoryRepository, llm_service: LlmService) -> None:
    run = repository.create_run(Run())
    nodes = [make_node(1, "First", "a", ProviderCredential(id="x", provider="mystery"))]

    make_runner(repository, llm_service).run_steps(run, nodes, PromptVersionLookup())

    steps = repository.list_run_steps(None, run.id)
    assert steps[0].validation_errors == ["LLM call failed: Unsupported provider: mystery"]


def test_retry_metadata_is_recorded(
    repository: InMemoryRepository,
    llm_service: LlmService,
    client: ScriptedClient,
    credential: ProviderCredential,
) -> None:
    client.responses = [LlmResponse(content="ok", meta={"retry_count": 2, "retry_reasons": ["429", "500"]})]
    run = repository.create_run(Run())

    make_runner(repository, llm_service).run_steps(run, [make_node(1, "First", "a", credential)], PromptVersionLookup())

    step = repository.list_run_steps(None, run.id)[0]
    assert step.retry_count == 2
    assert step.retry_reasons == ["429", "500"]
