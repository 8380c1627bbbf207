"""Identifier type shared by stored records."""

from __future__ import annotations

from typing import TypeAlias

Identifier: TypeAlias = int | str
