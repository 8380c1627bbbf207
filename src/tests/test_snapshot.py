from prompt_chain.models import Chain
from prompt_chain.models import ChainNode
from prompt_chain.models import Run
from prompt_chain.repository import InMemoryRepository
from prompt_chain.schema_parser import apply_schema_definition
from prompt_chain.snapshot import ChainSnapshotLoader

from conftest import add_prompt


def make_chain() -> Chain:
    outline = apply_schema_definition(
        ChainNode.model_validate(
            {
                "id": 10,
                "name": "Outline",
                "order_index": 2,
                "provider_credential_id": "cred",
                "model_name": "m",
                "messages_config": [{"prompt_template_id": "outline"}],
            }
        ),
        "{ title: string }",
    )
    intro = ChainNode.model_validate(
        {
            "id": 11,
            "name": "Intro",
            "order_index": 1,
            "provider_credential_id": "cred",
            "model_name": "m",
            "messages_config": [{"mode": "inline", "inline_content": "hi"}],
        }
    )
    return Chain(id="c1", name="Chain", nodes=[outline, intro])


def test_create_snapshot_orders_nodes_and_pins_versions(repository: InMemoryRepository) -> None:
    add_prompt(repository, "outline", ["v1", "v2"], [])

    snapshot = ChainSnapshotLoader(repository).create_snapshot(make_chain())

    assert [item["id"] for item in snapshot] == [11, 10]
    assert snapshot[1]["messages_config"][0]["prompt_version_id"] == "outline@2"
    assert snapshot[1]["output_schema"] == {
        "type": "object",
        "fields": {"title": {"type": "string", "required": True}},
    }
    assert "provider_credential" not in snapshot[0]
    assert "output_schema_definition" not in snapshot[0]


def test_load_creates_and_persists_snapshot_once(repository: InMemoryRepository) -> None:
    add_prompt(repository, "outline", ["v1"], [])
    repository.add_chain(make_chain())
    run = repository.create_run(Run(chain_id="c1"))
    loader = ChainSnapshotLoader(repository)

    nodes = loader.load(run)

    assert [node.id for node in nodes] == [11, 10]
    assert nodes[0].provider_credential is not None
    assert nodes[0].provider_credential.id == "cred"
    assert run.chain_snapshot
    stored = repository.get_run(None, run.id)
    assert stored is not None
    assert stored.chain_snapshot == run.chain_snapshot

    # Later edits to the chain and new prompt versions do not leak into the run.
    add_prompt(repository, "outline", ["v1", "v2"], [])
    repository.add_chain(Chain(id="c1", name="Edited", nodes=[]))
    reloaded = loader.load(run)

    assert [node.id for node in reloaded] == [11, 10]
    assert reloaded[1].messages_config[0].prompt_version_id == "outline@1"


def test_load_leaves_credential_empty_when_missing() -> None:
    repository = InMemoryRepository()
    run = Run(
        chain_snapshot=[
            {"id": 1, "name": "A", "order_index": 1, "provider_credential_id": "gone", "messages_config": []},
        ]
    )

    nodes = ChainSnapshotLoader(repository).load(run)

    assert len(nodes) == 1
    assert nodes[0].provider_credential is None


def test_load_without_snapshot_or_chain_returns_no_nodes() -> None:
    repository = InMemoryRepository()
    run = repository.create_run(Run(chain_id="missing"))

    assert ChainSnapshotLoader(repository).load(run) == []


def test_create_snapshot_pins_only_template_mode_messages(repository: InMemoryRepository) -> None:
    add_prompt(repository, "outline", ["v1"], [])
    node = ChainNode.model_validate(
        {
            "id": 1,
            "messages_config": [
                {"prompt_template_id": "outline"},
                {"mode": "template", "prompt_template_id": "outline"},
                {"mode": "legacy", "prompt_template_id": "outline"},
            ],
        }
    )

    snapshot = ChainSnapshotLoader(repository).create_snapshot(Chain(id="c", nodes=[node]))

    messages = snapshot[0]["messages_config"]
    assert [message["prompt_version_id"] for message in messages] == ["outline@1", "outline@1", None]
    assert messages[2]["mode"] == "legacy"
