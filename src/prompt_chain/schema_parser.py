"""Parser for compact interface-style output schema definitions.

Definitions look like TypeScript object types::

    { title: string; tags?: string[]; mood: "happy" | "sad"; meta: { score: number } }

Fields are separated by ``;``, a ``?`` after the name marks the field optional,
and types are ``string``, ``number``, ``boolean``, string-literal unions,
nested objects and ``T[]`` arrays of any of these.
"""

from __future__ import annotations

import re

from prompt_chain.exceptions import SchemaSyntaxError
from prompt_chain.json_utils import split_top_level
from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.schema_node import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
)

FIELD_RE = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)(\?)?\s*:\s*(.+)$", re.DOTALL)
STRING_UNION_RE = re.compile(r"^\"[^\"]+\"(\s*\|\s*\"[^\"]+\")+$")

LEAF_TYPES = {
    "string": StringSchema,
    "number": NumberSchema,
    "boolean": BooleanSchema,
}


def parse_schema(definition: str | None) -> ObjectSchema | None:
    if not definition or not definition.strip():
        return None

    trimmed = definition.strip()
    if not trimmed.startswith("{") or not trimmed.endswith("}"):
        raise SchemaSyntaxError("Schema must start with { and end with }.")

    return ObjectSchema(fields=parse_fields(trimmed[1:-1].strip()))


def parse_fields(body: str) -> dict[str, SchemaNode]:
    fields: dict[str, SchemaNode] = {}
    for part in split_top_level(body, ";"):
        clause = part.strip()
        if not clause:
            continue
        name, schema = parse_field(clause)
        fields[name] = schema
    return fields


def parse_field(clause: str) -> tuple[str, SchemaNode]:
    match = FIELD_RE.match(clause)
    if match is None:
        raise SchemaSyntaxError(f"Invalid field definition: {clause}")
    name, optional, type_expr = match.group(1), match.group(2), match.group(3).strip()
    schema = parse_type(type_expr)
    schema.required = optional != "?"
    return name, schema


def parse_type(expr: str) -> SchemaNode:
    if STRING_UNION_RE.match(expr):
        return EnumSchema(values=parse_enum_values(expr))

    if expr.endswith("[]"):
        return ArraySchema(items=parse_type(expr[:-2].strip()))

    leaf = LEAF_TYPES.get(expr)
    if leaf is not None:
        return leaf()

    if expr.startswith("{") and expr.endswith("}"):
        return ObjectSchema(fields=parse_fields(expr[1:-1].strip()))

    raise SchemaSyntaxError(f"Unsupported type expression: {expr}")


def parse_enum_values(expr: str) -> list[str]:
    values = [item.strip(" \\\"'") for item in split_top_level(expr, "|")]
    return [value for value in values if value]


def apply_schema_definition(node: ChainNode, definition: str | None) -> ChainNode:
    """
    Return a copy of the node carrying the definition text and its parsed schema.
    """
    schema = parse_schema(definition)
    return node.model_copy(update={"output_schema_definition": definition, "output_schema": schema})
