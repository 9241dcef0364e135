"""Structured completion entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompletionRequest:
    """Input contract for one structured completion."""

    target_type: Any
    prompt: str
    max_attempts: int = 1


@dataclass(frozen=True)
class CompletionOutcome:
    """Decoded reply and the number of requests it took."""

    value: Any
    attempts: int
    payload: Any
