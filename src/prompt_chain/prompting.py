"""Prompt placeholder helpers."""

from __future__ import annotations

import re
from typing import Any, Mapping

VARIABLE_NAME_RE = re.compile(r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_.]*)\s*\}\}")
PLACEHOLDER_RE = re.compile(r"{{\s*(.*?)\s*}}")


def extract_variables(content: str) -> list[str]:
    """
    Unique placeholder names in order of first appearance.
    """
    return list(dict.fromkeys(VARIABLE_NAME_RE.findall(content)))


def format_value(value: Any) -> str:
    # Only scalars are substituted; structured values render empty.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def render_template(content: str, variables: Mapping[str, Any]) -> str:
    return PLACEHOLDER_RE.sub(lambda match: format_value(variables.get(match.group(1))), content)
