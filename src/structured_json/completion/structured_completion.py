"""Structured completion use-case service."""

from __future__ import annotations

import json
import logging
from typing import Any

from structured_json.schema_compilation import build_schema
from structured_json.value_decoding import try_decode

from .completion_client import CompletionClient
from .completion_contracts import CompletionOutcome, CompletionRequest

_LOGGER = logging.getLogger(__name__)


class StructuredCompletionError(Exception):
    """Raised when no reply could be decoded into the requested type."""


def execute_structured_completion(
    request: CompletionRequest, *, client: CompletionClient
) -> CompletionOutcome:
    """Ask the client for JSON matching the schema of the target type and decode it.

    Replies that are not valid JSON or do not decode are requested again, up to
    `request.max_attempts` times. Client errors are not retried.
    """
    if request.max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")
    schema = build_schema(request.target_type)
    last_error: Exception | None = None

    for attempt in range(1, request.max_attempts + 1):
        text = client.complete(prompt=request.prompt, schema=schema)
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            last_error = exc
            _LOGGER.warning(
                "Attempt %d/%d returned invalid JSON: %s", attempt, request.max_attempts, exc
            )
            continue

        outcome = try_decode(request.target_type, payload)
        if outcome.ok:
            return CompletionOutcome(value=outcome.value, attempts=attempt, payload=payload)
        last_error = outcome.error
        _LOGGER.warning(
            "Attempt %d/%d could not be decoded: %s", attempt, request.max_attempts, outcome.error
        )

    raise StructuredCompletionError(
        f"No usable reply after {request.max_attempts} attempt(s): {last_error}"
    ) from last_error


def request_structured_value(
    target_type: Any, prompt: str, *, client: CompletionClient, max_attempts: int = 1
) -> Any:
    """Return only the decoded value of a structured completion."""
    request = CompletionRequest(target_type=target_type, prompt=prompt, max_attempts=max_attempts)
    return execute_structured_completion(request, client=client).value
