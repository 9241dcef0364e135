"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import CompletionSettings, Configuration

DEFAULT_MODEL_SCHEMA_NAME = "structured_output"
_SCHEMA_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    completion = _parse_completion_section(parsed.get("completion"))
    return Configuration(path=path, completion=completion)


def _parse_completion_section(value: Any) -> CompletionSettings:
    section = _require_mapping(value, "completion")
    model = _require_non_empty_string(section.get("model"), "completion.model")
    schema_name = _require_non_empty_string(
        section.get("schema_name", DEFAULT_MODEL_SCHEMA_NAME), "completion.schema_name"
    )
    if not _SCHEMA_NAME_PATTERN.fullmatch(schema_name):
        raise ConfigurationError(
            "completion.schema_name may only contain letters, digits, '_' and '-' "
            "(at most 64 characters)."
        )
    max_output_tokens = _require_positive_int(
        section.get("max_output_tokens", 1200), "completion.max_output_tokens"
    )
    strict = _require_bool(section.get("strict", True), "completion.strict")
    max_attempts = _require_positive_int(
        section.get("max_attempts", 3), "completion.max_attempts"
    )
    api_key_env = _require_non_empty_string(
        section.get("api_key_env", "OPENAI_API_KEY"), "completion.api_key_env"
    )
    system_prompt = _optional_string(section.get("system_prompt"), "completion.system_prompt")
    return CompletionSettings(
        model=model,
        schema_name=schema_name,
        max_output_tokens=max_output_tokens,
        strict=strict,
        max_attempts=max_attempts,
        api_key_env=api_key_env,
        system_prompt=system_prompt,
    )


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
