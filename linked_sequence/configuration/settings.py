"""Typed settings sections consumed by the linked list."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SequenceSettings(BaseModel):
    """Defaults for ``LinkedList`` operations that take optional tuning."""

    shuffle_depth: int = Field(default=10, ge=0)
    arrow: str = " -> "
    terminator: str = "/"
    indent: int = Field(default=2, ge=0)
