"""Validation of decoded provider output against a schema tree."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from prompt_chain.json_utils import decode_json
from prompt_chain.models.schema_node import schema_to_dict

SUPPORTED_TYPES = ("string", "number", "boolean", "enum", "array", "object")


def join_path(base: str, segment: str) -> str:
    if base == "":
        return segment
    if segment.startswith("["):
        return f"{base}{segment}"
    return f"{base}.{segment}"


def _schema_mapping(schema: BaseModel | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if isinstance(schema, BaseModel):
        return schema_to_dict(schema)
    return schema


class SchemaValidator:
    def parse_and_validate(
        self,
        content: str | None,
        schema: BaseModel | Mapping[str, Any] | None,
    ) -> tuple[Any, list[str]]:
        """
        Decode provider output and check it against the node's schema.
        Without a schema, undecodable output is not an error; the parsed value is just None.
        """
        if content is None:
            return None, ["No response received"]

        ok, parsed = decode_json(content)
        schema_map = _schema_mapping(schema)

        if not schema_map:
            return (parsed if ok else None), []

        if not ok:
            return None, ["Response is not valid JSON"]

        return parsed, self.validate(parsed, schema_map, "response")

    def validate(self, data: Any, schema: BaseModel | Mapping[str, Any], path: str) -> list[str]:
        schema_map = _schema_mapping(schema) or {}
        schema_type = schema_map.get("type")

        if not schema_type:
            return [f"{path} schema type is required."]
        if schema_type not in SUPPORTED_TYPES:
            return [f"{path} has unsupported schema type: {schema_type}."]

        if schema_type == "string":
            return [] if isinstance(data, str) else [f"{path} must be a string."]
        if schema_type == "number":
            is_number = isinstance(data, (int, float)) and not isinstance(data, bool)
            return [] if is_number else [f"{path} must be a number."]
        if schema_type == "boolean":
            return [] if isinstance(data, bool) else [f"{path} must be a boolean."]
        if schema_type == "enum":
            return self._validate_enum(data, schema_map, path)
        if schema_type == "array":
            return self._validate_array(data, schema_map, path)
        return self._validate_object(data, schema_map, path)

    def _validate_enum(self, data: Any, schema: Mapping[str, Any], path: str) -> list[str]:
        values = schema.get("values", [])
        if not isinstance(values, list):
            return [f"{path} enum values must be an array."]
        # Strict membership: 1 does not match "1" and True does not match 1.
        if any(type(value) is type(data) and value == data for value in values):
            return []
        allowed = ", ".join(str(value) for value in values)
        return [f"{path} must be one of: {allowed}."]

    def _validate_array(self, data: Any, schema: Mapping[str, Any], path: str) -> list[str]:
        if not isinstance(data, list):
            return [f"{path} must be an array."]
        items = schema.get("items")
        if items is None:
            return []
        errors: list[str] = []
        for index, item in enumerate(data):
            errors.extend(self.validate(item, items, join_path(path, f"[{index}]")))
        return errors

    def _validate_object(self, data: Any, schema: Mapping[str, Any], path: str) -> list[str]:
        if not isinstance(data, dict):
            return [f"{path} must be an object."]
        errors: list[str] = []
        fields = schema.get("fields") or {}
        for field_name, field_schema in fields.items():
            field_path = join_path(path, field_name)
            if field_name in data:
                errors.extend(self.validate(data[field_name], field_schema, field_path))
            elif bool(field_schema.get("required", False)):
                errors.append(f"{field_path} is required.")
        return errors
