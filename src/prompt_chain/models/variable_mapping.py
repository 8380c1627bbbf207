"""Pydantic models describing where a template variable gets its value."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Tag, TypeAdapter, field_validator


class InputMapping(BaseModel):
    source: Literal["input"] = "input"
    path: Optional[str] = None

    @field_validator("source", mode="before")
    @classmethod
    def _empty_source_is_input(cls, value: Any) -> Any:
        return value or "input"


class PreviousStepMapping(BaseModel):
    source: Literal["previous_step"] = "previous_step"
    step_key: Optional[str] = None
    path: Optional[str] = None


class ConstantMapping(BaseModel):
    source: Literal["constant"] = "constant"
    value: Any = None


def _mapping_source(value: Any) -> str:
    if isinstance(value, dict):
        source = value.get("source")
    else:
        source = getattr(value, "source", None)
    # A mapping without a source reads from the run input.
    return source or "input"


VariableMapping = Annotated[
    Union[
        Annotated[InputMapping, Tag("input")],
        Annotated[PreviousStepMapping, Tag("previous_step")],
        Annotated[ConstantMapping, Tag("constant")],
    ],
    Discriminator(_mapping_source),
]

variable_mapping_adapter: TypeAdapter[Any] = TypeAdapter(VariableMapping)
