"""JSON decoding and top-level scanning helpers."""

from __future__ import annotations

import json
from typing import Any


def decode_json(text: str) -> tuple[bool, Any]:
    """
    Decode provider output as JSON.
    Returns (ok, value); value is None when decoding failed.
    """
    try:
        return True, json.loads(text)
    except (TypeError, ValueError):
        return False, None


def split_top_level(text: str, delimiter: str) -> list[str]:
    """
    Split text on a delimiter that is not nested inside braces or a quoted string.
    A trailing blank chunk is dropped.
    """
    parts: list[str] = []
    buffer: list[str] = []
    depth = 0
    in_string = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\"" and (i == 0 or text[i - 1] != "\\"):
            in_string = not in_string

        if not in_string:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1

        if depth == 0 and not in_string and text.startswith(delimiter, i):
            parts.append("".join(buffer))
            buffer = []
            i += len(delimiter)
            continue

        buffer.append(ch)
        i += 1

    tail = "".join(buffer)
    if tail.strip():
        parts.append(tail)
    return parts
