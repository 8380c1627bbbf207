"""Resolution of template variables from run input, step outputs and constants."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from prompt_chain.models.step_output import StepOutput
from prompt_chain.models.variable_mapping import (
    ConstantMapping,
    InputMapping,
    PreviousStepMapping,
    variable_mapping_adapter,
)

BRACKET_INDEX_RE = re.compile(r"\[(.*?)\]")
STEP_OUTPUT_FIELDS = ("parsed_output", "raw_output", "response_raw")


def normalize_path(path: str | None) -> str | None:
    if path is None:
        return None
    return BRACKET_INDEX_RE.sub(r".\1", path).lstrip(".")


def lookup_path(target: Any, path: str | None) -> Any:
    """
    Walk a dotted path through dicts (by key) and lists (by integer index).
    Returns None as soon as a segment is missing.
    """
    if not path:
        return target
    current = target
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, (list, tuple)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return current


def variable_names(template_variables: Iterable[Any]) -> list[str]:
    names: list[str] = []
    for item in template_variables:
        if isinstance(item, Mapping):
            name = item.get("name")
        elif isinstance(item, str):
            name = item
        else:
            name = None
        if name:
            names.append(name)
    return list(dict.fromkeys(names))


class VariableResolver:
    def resolve(
        self,
        template_variables: Iterable[Any],
        mappings: Mapping[str, Any],
        input_data: Mapping[str, Any],
        step_outputs: Mapping[str, StepOutput | Mapping[str, Any]],
    ) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for name in variable_names(template_variables):
            raw_mapping = mappings.get(name)
            if not raw_mapping:
                resolved[name] = lookup_path(input_data, name)
                continue
            mapping = variable_mapping_adapter.validate_python(raw_mapping)
            resolved[name] = self._resolve_mapping(name, mapping, input_data, step_outputs)
        return resolved

    def _resolve_mapping(
        self,
        name: str,
        mapping: InputMapping | PreviousStepMapping | ConstantMapping,
        input_data: Mapping[str, Any],
        step_outputs: Mapping[str, StepOutput | Mapping[str, Any]],
    ) -> Any:
        if isinstance(mapping, ConstantMapping):
            return mapping.value
        if isinstance(mapping, PreviousStepMapping):
            return self._from_previous_step(mapping, step_outputs)
        return lookup_path(input_data, normalize_path(mapping.path) or name)

    def _from_previous_step(
        self,
        mapping: PreviousStepMapping,
        step_outputs: Mapping[str, StepOutput | Mapping[str, Any]],
    ) -> Any:
        step_key = mapping.step_key
        if not step_key or step_key not in step_outputs:
            return None

        output = step_outputs[step_key]
        record = output.as_dict() if isinstance(output, StepOutput) else output
        path = normalize_path(mapping.path)

        if not path:
            parsed = record.get("parsed_output")
            return parsed if parsed is not None else record.get("raw_output")

        value = lookup_path(record, path)
        if value is None and not path.startswith(STEP_OUTPUT_FIELDS):
            # Bare paths address the parsed output.
            value = lookup_path(record.get("parsed_output"), path)
        return value
