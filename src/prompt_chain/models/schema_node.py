"""Pydantic models for the parsed output schema tree."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class StringSchema(BaseModel):
    type: Literal["string"] = "string"
    required: Optional[bool] = None


class NumberSchema(BaseModel):
    type: Literal["number"] = "number"
    required: Optional[bool] = None


class BooleanSchema(BaseModel):
    type: Literal["boolean"] = "boolean"
    required: Optional[bool] = None


class EnumSchema(BaseModel):
    type: Literal["enum"] = "enum"
    values: list[str] = Field(default_factory=list)
    required: Optional[bool] = None


class ArraySchema(BaseModel):
    type: Literal["array"] = "array"
    items: Optional["SchemaNode"] = None
    required: Optional[bool] = None


class ObjectSchema(BaseModel):
    type: Literal["object"] = "object"
    fields: dict[str, "SchemaNode"] = Field(default_factory=dict)
    required: Optional[bool] = None


SchemaNode = Annotated[
    Union[StringSchema, NumberSchema, BooleanSchema, EnumSchema, ArraySchema, ObjectSchema],
    Field(discriminator="type"),
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()

schema_node_adapter: TypeAdapter[Any] = TypeAdapter(SchemaNode)


def schema_to_dict(node: BaseModel) -> dict[str, Any]:
    """Stored JSON form of a schema node; unset members are left out."""
    return node.model_dump(exclude_none=True)
