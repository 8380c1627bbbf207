"""Pydantic model for a chain of nodes."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from prompt_chain.models.chain_node import ChainNode
from prompt_chain.models.identifiers import Identifier


class Chain(BaseModel):
    id: Identifier
    project_id: Optional[Identifier] = None
    name: str = ""
    description: str = ""
    is_quick_prompt: bool = False
    nodes: list[ChainNode] = Field(default_factory=list)

    def ordered_nodes(self) -> list[ChainNode]:
        return sorted(self.nodes, key=lambda node: node.order_index)
