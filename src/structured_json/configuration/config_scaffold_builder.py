"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "structured-json.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for structured-json.
# Replace every <REQUIRED> placeholder before running complete.
# Remove or fill <OPTIONAL> entries; omitted entries use the documented defaults.

completion:
  # Model name passed to the completion API.
  model: "<REQUIRED>"
  # Name of the JSON schema sent with the request (letters, digits, '_' and '-').
  schema_name: "structured_output"
  max_output_tokens: 1200
  # Ask the API to enforce the schema strictly.
  strict: true
  # Requests are repeated when the reply is not valid JSON or does not decode.
  max_attempts: 3
  # Environment variable holding the API key (a .env file is honoured).
  api_key_env: "OPENAI_API_KEY"
  # system_prompt: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
