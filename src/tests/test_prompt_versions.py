from prompt_chain.models import ChainNode
from prompt_chain.models import PromptVersion
from prompt_chain.prompt_versions import PromptVersionResolver
from prompt_chain.prompt_versions import latest_by_template
from prompt_chain.prompt_versions import referenced_ids
from prompt_chain.repository import InMemoryRepository

from conftest import add_prompt


def test_latest_by_template_picks_highest_version() -> None:
    versions = [
        PromptVersion(id="a1", prompt_template_id="a", version=1),
        PromptVersion(id="a3", prompt_template_id="a", version=3),
        PromptVersion(id="a2", prompt_template_id="a", version=2),
        PromptVersion(id="b1", prompt_template_id="b", version=1),
    ]

    latest = latest_by_template(versions)

    assert latest["a"].id == "a3"
    assert latest["b"].id == "b1"


def test_referenced_ids_skips_inline_messages() -> None:
    nodes = [
        ChainNode.model_validate(
            {
                "id": 1,
                "messages_config": [
                    {"prompt_template_id": "a"},
                    {"prompt_version_id": "b@2"},
                    {"mode": "inline", "inline_content": "hi"},
                ],
            }
        ),
        ChainNode.model_validate({"id": 2, "messages_config": [{"prompt_template_id": "a"}]}),
    ]

    assert referenced_ids(nodes) == (["a"], ["b@2"])


def test_load_for_nodes_builds_lookup(repository: InMemoryRepository) -> None:
    add_prompt(repository, "a", ["one", "two"], [])
    add_prompt(repository, "b", ["first", "second"], ["x"])
    nodes = [
        ChainNode.model_validate(
            {"id": 1, "messages_config": [{"prompt_template_id": "a"}, {"prompt_version_id": "b@1"}]}
        )
    ]

    lookup = PromptVersionResolver(repository).load_for_nodes(nodes)

    assert lookup.find(None, "a").content == "two"
    assert lookup.find("b@1", None).content == "first"
    assert lookup.find("b@1", None).declared_variables() == ["x"]
    assert lookup.find("missing", "a") is None


def test_load_for_nodes_without_references_skips_repository() -> None:
    class ExplodingRepository(InMemoryRepository):
        def find_prompt_versions(self, tenant_id, *, version_ids=(), template_ids=()):  # type: ignore[no-untyped-def]
            raise AssertionError("should not be called")

    nodes = [ChainNode.model_validate({"id": 1, "messages_config": [{"mode": "inline", "inline_content": "x"}]})]

    lookup = PromptVersionResolver(ExplodingRepository()).load_for_nodes(nodes)

    assert lookup.by_id == {}
    assert lookup.by_template == {}


def test_load_for_nodes_is_tenant_scoped(repository: InMemoryRepository) -> None:
    add_prompt(repository, "a", ["tenant one"], [], tenant_id=1)
    nodes = [ChainNode.model_validate({"id": 1, "messages_config": [{"prompt_template_id": "a"}]})]

    resolver = PromptVersionResolver(repository)

    assert resolver.load_for_nodes(nodes, tenant_id=2).find(None, "a") is None
    assert resolver.load_for_nodes(nodes, tenant_id=1).find(None, "a").content == "tenant one"
