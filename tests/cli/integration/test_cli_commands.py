"""CLI command integration tests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from structured_json import cli as cli_module
from structured_json.cli import cli
from structured_json.configuration.runtime_settings import CompletionSettings

SAMPLE_TYPES = '''
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Foo:
    x: int
    y: str


@dataclass
class Bar:
    foo: Foo
    next: Bar | None
'''


@pytest.fixture
def sample_types(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    package_dir = tmp_path / "modules"
    package_dir.mkdir()
    (package_dir / "cli_sample_types.py").write_text(SAMPLE_TYPES, encoding="utf-8")
    monkeypatch.syspath_prepend(str(package_dir))
    return "cli_sample_types"


def _write_config(tmp_path: Path, max_attempts: int = 2) -> Path:
    config = {
        "completion": {
            "model": "gpt-4o-mini",
            "max_attempts": max_attempts,
            "api_key_env": "STRUCTURED_JSON_TEST_KEY",
        }
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_schema_command_prints_schema(sample_types: str) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["schema", f"{sample_types}:Bar"])

    assert result.exit_code == 0
    schema = json.loads(result.output)
    assert schema["properties"]["foo"] == {"$ref": "#/$defs/Foo"}
    assert list(schema["$defs"]) == ["Foo", "Bar"]


def test_schema_command_writes_output_file(sample_types: str, tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "foo.schema.json"

    result = runner.invoke(
        cli, ["schema", f"{sample_types}:Foo", "--output", str(output_path)]
    )

    assert result.exit_code == 0
    assert str(output_path.resolve()) in result.output
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["required"] == ["x", "y"]


def test_decode_command_prints_decoded_value(sample_types: str, tmp_path: Path) -> None:
    runner = CliRunner()
    input_path = tmp_path / "bar.json"
    input_path.write_text(
        json.dumps({"foo": {"x": 1, "y": "a"}, "next": None}), encoding="utf-8"
    )

    result = runner.invoke(cli, ["decode", f"{sample_types}:Bar", "--input", str(input_path)])

    assert result.exit_code == 0
    assert "Bar(foo=Foo(x=1, y='a'), next=None)" in result.output


def test_decode_command_reports_decode_errors(sample_types: str, tmp_path: Path) -> None:
    input_path = tmp_path / "foo.json"
    input_path.write_text(json.dumps({"x": 1}), encoding="utf-8")

    exit_code = cli_module.main(["decode", f"{sample_types}:Foo", "--input", str(input_path)])

    assert exit_code == 1


def test_decode_command_reports_undecodable_input_bytes(
    sample_types: str, tmp_path: Path, capsys
) -> None:
    input_path = tmp_path / "foo.json"
    input_path.write_bytes(b"\xff\xfe{")

    exit_code = cli_module.main(["decode", f"{sample_types}:Foo", "--input", str(input_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "utf-8" in captured.err
    assert "Traceback" not in captured.err


def test_complete_command_decodes_reply(
    sample_types: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    requests: list[tuple[str, Mapping[str, Any]]] = []

    class FakeClient:
        def __init__(self, settings: CompletionSettings) -> None:
            assert settings.model == "gpt-4o-mini"
            self._replies = ["{}", '{"x": 5, "y": "five"}']

        def complete(self, *, prompt: str, schema: Mapping[str, Any]) -> str:
            requests.append((prompt, schema))
            return self._replies.pop(0)

    monkeypatch.setattr(cli_module, "OpenAIResponsesClient", FakeClient)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "complete",
            f"{sample_types}:Foo",
            "--config",
            str(_write_config(tmp_path)),
            "--prompt",
            "Make a Foo",
        ],
    )

    assert result.exit_code == 0
    assert "Foo(x=5, y='five')" in result.output
    assert len(requests) == 2
    assert requests[0][0] == "Make a Foo"
    assert requests[0][1]["required"] == ["x", "y"]


def test_complete_command_reports_exhausted_attempts(
    sample_types: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    class FakeClient:
        def __init__(self, settings: CompletionSettings) -> None:
            self.settings = settings

        def complete(self, *, prompt: str, schema: Mapping[str, Any]) -> str:
            return "not json"

    monkeypatch.setattr(cli_module, "OpenAIResponsesClient", FakeClient)

    exit_code = cli_module.main(
        [
            "complete",
            f"{sample_types}:Foo",
            "--config",
            str(_write_config(tmp_path, max_attempts=1)),
            "--prompt",
            "Make a Foo",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "No usable reply after 1 attempt(s)" in captured.err


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "structured-json.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert "completion:" in output_path.read_text(encoding="utf-8")


def test_generate_config_command_refuses_to_overwrite(tmp_path: Path) -> None:
    output_path = tmp_path / "structured-json.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = cli_module.main(["generate-config", "--output", str(output_path)])

    assert exit_code == 1
    assert output_path.read_text(encoding="utf-8") == "existing"
