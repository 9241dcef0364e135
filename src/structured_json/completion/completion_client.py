"""Completion API clients that answer a prompt with schema-conforming JSON text."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Protocol

from dotenv import load_dotenv
from openai import OpenAI, OpenAIError

from structured_json.configuration.runtime_settings import CompletionSettings

_LOGGER = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API cannot produce a reply."""


class CompletionClient(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol implemented by both real and fake completion clients."""

    def complete(self, *, prompt: str, schema: Mapping[str, Any]) -> str: ...


class OpenAIResponsesClient:  # pylint: disable=too-few-public-methods
    """Client for the OpenAI Responses API using a strict `json_schema` text format."""

    def __init__(self, settings: CompletionSettings, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client or self._create_client()

    def complete(self, *, prompt: str, schema: Mapping[str, Any]) -> str:
        """Send one request and return the reply text."""
        messages: list[dict[str, str]] = []
        if self._settings.system_prompt:
            messages.append({"role": "system", "content": self._settings.system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            response = self._client.responses.create(
                model=self._settings.model,
                input=messages,
                max_output_tokens=self._settings.max_output_tokens,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": self._settings.schema_name,
                        "schema": dict(schema),
                        "strict": self._settings.strict,
                    }
                },
            )
        except OpenAIError as exc:
            raise CompletionError(f"Completion request failed: {exc}") from exc

        output_text = getattr(response, "output_text", "") or ""
        if not output_text:
            raise CompletionError("Completion response is empty.")
        _LOGGER.debug("Received %d characters from %s", len(output_text), self._settings.model)
        return output_text

    def _create_client(self) -> OpenAI:
        load_dotenv()
        api_key = os.environ.get(self._settings.api_key_env)
        if not api_key:
            raise CompletionError(f"{self._settings.api_key_env} is not set.")
        return OpenAI(api_key=api_key)
