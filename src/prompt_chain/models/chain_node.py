"""Pydantic model for one step definition of a chain."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.message_spec import MessageSpec
from prompt_chain.models.provider_credential import ProviderCredential
from prompt_chain.models.schema_node import SchemaNode, schema_to_dict

SLUG_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str, separator: str = "_") -> str:
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return SLUG_SEPARATOR_RE.sub(separator, ascii_text.lower()).strip(separator)


class ChainNode(BaseModel):
    id: Identifier
    name: str = ""
    order_index: int = 0
    provider_credential_id: Optional[Identifier] = None
    model_name: str = ""
    model_params: dict[str, Any] = Field(default_factory=dict)
    messages_config: list[MessageSpec] = Field(default_factory=list)
    output_schema: Optional[SchemaNode] = None
    output_schema_definition: Optional[str] = None
    stop_on_validation_error: bool = False
    # Attached at load time, never part of a snapshot.
    provider_credential: Optional[ProviderCredential] = Field(default=None, exclude=True)

    @field_validator("name", "model_name", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("model_params", mode="before")
    @classmethod
    def _default_params(cls, value: Any) -> Any:
        return value or {}

    @field_validator("messages_config", mode="before")
    @classmethod
    def _drop_non_map_messages(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, BaseModel))]

    @field_validator("output_schema", mode="before")
    @classmethod
    def _empty_schema_is_none(cls, value: Any) -> Any:
        return value or None

    @field_validator("stop_on_validation_error", mode="before")
    @classmethod
    def _default_stop(cls, value: Any) -> Any:
        return bool(value)

    @field_serializer("output_schema")
    def _serialize_schema(self, value: BaseModel | None) -> dict[str, Any] | None:
        if value is None:
            return None
        return schema_to_dict(value)

    def step_key(self) -> str:
        return slugify(self.name) or f"step_{self.id}"
