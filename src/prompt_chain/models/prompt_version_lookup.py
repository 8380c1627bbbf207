"""Prompt versions resolved for one run."""

from __future__ import annotations

from dataclasses import dataclass, field

from prompt_chain.models.identifiers import Identifier
from prompt_chain.models.prompt_version import PromptVersion


@dataclass
class PromptVersionLookup:
    by_id: dict[Identifier, PromptVersion] = field(default_factory=dict)
    by_template: dict[Identifier, PromptVersion] = field(default_factory=dict)

    def find(self, version_id: Identifier | None, template_id: Identifier | None) -> PromptVersion | None:
        # An explicit version id never falls back to the template's latest version.
        if version_id:
            return self.by_id.get(version_id)
        if template_id:
            return self.by_template.get(template_id)
        return None
