"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from structured_json.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from structured_json.configuration.loader import load_configuration


def test_build_placeholder_configuration_contains_all_supported_settings() -> None:
    scaffold = build_placeholder_configuration()

    assert "Configuration template for structured-json" in scaffold
    assert "completion:" in scaffold
    for key in (
        "model:",
        "schema_name:",
        "max_output_tokens:",
        "strict:",
        "max_attempts:",
        "api_key_env:",
        "system_prompt:",
    ):
        assert key in scaffold
    assert "<REQUIRED>" in scaffold
    assert "<OPTIONAL>" in scaffold


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_filled_scaffold_loads(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    scaffold = build_placeholder_configuration().replace("<REQUIRED>", "gpt-4o-mini")
    output_path.write_text(scaffold, encoding="utf-8")

    settings = load_configuration(output_path).completion

    assert settings.model == "gpt-4o-mini"
    assert settings.max_attempts == 3


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
