"""Pydantic models for prompt templates and their numbered versions."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from prompt_chain.models.identifiers import Identifier


class PromptTemplate(BaseModel):
    id: Identifier
    name: str = ""
    variables: list[str | dict[str, Any]] = Field(default_factory=list)


class PromptVersion(BaseModel):
    id: Identifier
    prompt_template_id: Identifier
    version: int = 1
    content: str = ""
    template: Optional[PromptTemplate] = None

    def declared_variables(self) -> list[str | dict[str, Any]]:
        if self.template is None:
            return []
        return list(self.template.variables)
