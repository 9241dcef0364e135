"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CompletionSettings:
    """Completion API request and retry configuration."""

    model: str
    schema_name: str
    max_output_tokens: int
    strict: bool
    max_attempts: int
    api_key_env: str
    system_prompt: str | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    completion: CompletionSettings
