from typing import Any

import pytest
from pydantic import ValidationError

from prompt_chain.models import StepOutput
from prompt_chain.variable_resolver import VariableResolver
from prompt_chain.variable_resolver import lookup_path
from prompt_chain.variable_resolver import normalize_path
from prompt_chain.variable_resolver import variable_names


def test_normalize_path_converts_brackets() -> None:
    assert normalize_path("items[0].name") == "items.0.name"
    assert normalize_path("[1].x") == "1.x"
    assert normalize_path(None) is None


def test_lookup_path_walks_dicts_and_lists() -> None:
    data = {"user": {"tags": ["a", "b"]}}

    assert lookup_path(data, "user.tags.1") == "b"
    assert lookup_path(data, "user.tags.5") is None
    assert lookup_path(data, "user.tags.x") is None
    assert lookup_path(data, "user.missing") is None
    assert lookup_path(data, "") == data


def test_variable_names_accepts_strings_and_mappings() -> None:
    assert variable_names(["a", {"name": "b"}, {"label": "c"}, 3, "a"]) == ["a", "b"]


def test_resolve_defaults_to_input_by_name() -> None:
    resolved = VariableResolver().resolve(["topic", "missing"], {}, {"topic": "cats"}, {})

    assert resolved == {"topic": "cats", "missing": None}


def test_resolve_input_mapping_with_path() -> None:
    mappings: dict[str, Any] = {
        "city": {"source": "input", "path": "address.city"},
        "first": {"path": "items[0]"},
    }
    input_data = {"address": {"city": "Oslo"}, "items": ["x", "y"]}

    resolved = VariableResolver().resolve(["city", "first"], mappings, input_data, {})

    assert resolved == {"city": "Oslo", "first": "x"}


def test_resolve_constant_mapping() -> None:
    mappings = {"tone": {"source": "constant", "value": "formal"}}

    assert VariableResolver().resolve(["tone"], mappings, {}, {}) == {"tone": "formal"}


def test_resolve_previous_step_mapping() -> None:
    outputs = {
        "outline": StepOutput(parsed_output={"title": "T", "sections": ["a", "b"]}, raw_output='{"title": "T"}'),
        "draft": StepOutput(parsed_output=None, raw_output="plain draft"),
    }
    mappings: dict[str, Any] = {
        "title": {"source": "previous_step", "step_key": "outline", "path": "title"},
        "second": {"source": "previous_step", "step_key": "outline", "path": "sections[1]"},
        "raw": {"source": "previous_step", "step_key": "outline", "path": "raw_output"},
        "draft": {"source": "previous_step", "step_key": "draft"},
        "whole": {"source": "previous_step", "step_key": "outline"},
        "unknown": {"source": "previous_step", "step_key": "nope", "path": "title"},
    }

    resolved = VariableResolver().resolve(list(mappings), mappings, {}, outputs)

    assert resolved == {
        "title": "T",
        "second": "b",
        "raw": '{"title": "T"}',
        "draft": "plain draft",
        "whole": {"title": "T", "sections": ["a", "b"]},
        "unknown": None,
    }


def test_resolve_ignores_mappings_for_undeclared_variables() -> None:
    mappings = {"other": {"source": "constant", "value": 1}}

    assert VariableResolver().resolve(["topic"], mappings, {"topic": "x"}, {}) == {"topic": "x"}


def test_resolve_rejects_unknown_source() -> None:
    with pytest.raises(ValidationError):
        VariableResolver().resolve(["x"], {"x": {"source": "env"}}, {}, {})


def test_resolve_previous_step_from_plain_mapping() -> None:
    mappings = {"city": {"source": "previous_step", "step_key": "first_step", "path": "parsed_output.address.city"}}
    outputs = {"first_step": {"parsed_output": {"address": {"city": "Paris"}}}}

    assert VariableResolver().resolve(["city"], mappings, {}, outputs) == {"city": "Paris"}


@pytest.mark.parametrize("source", [None, ""])
def test_resolve_empty_source_reads_input(source: Any) -> None:
    mappings = {"who": {"source": source, "path": "name"}}

    assert VariableResolver().resolve(["who"], mappings, {"name": "Ann"}, {}) == {"who": "Ann"}
