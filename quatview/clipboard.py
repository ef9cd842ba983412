"""Comma-separated clipboard text for groups of input fields."""

from __future__ import annotations

from itertools import chain, islice, repeat
from typing import Iterable, Optional


def clip_copy(values: Iterable[str]) -> str:
    """Join field values into clipboard text."""
    return ",".join(values)


def clip_paste(text: Optional[str], count: int) -> list[str]:
    """Split clipboard text into count trimmed fields, filling missing ones with "0"."""
    if count < 0:
        raise ValueError("count must not be negative")
    fields = chain((text or "").split(","), repeat("0"))
    return [field.strip() for field in islice(fields, count)]