"""Input/output helpers for the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_input(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    return ensure_mapping(data, str(path))


def parse_input_json(text: str) -> dict[str, Any]:
    return ensure_mapping(json.loads(text), "<inline>")


def ensure_mapping(data: Any, source_label: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Run input in {source_label} must be a mapping.")
    return data


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
