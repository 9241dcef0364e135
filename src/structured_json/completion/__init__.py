"""Structured completion exports."""

from .completion_client import CompletionClient, CompletionError, OpenAIResponsesClient
from .completion_contracts import CompletionOutcome, CompletionRequest
from .structured_completion import (
    StructuredCompletionError,
    execute_structured_completion,
    request_structured_value,
)

__all__ = [
    "CompletionClient",
    "CompletionError",
    "OpenAIResponsesClient",
    "CompletionOutcome",
    "CompletionRequest",
    "StructuredCompletionError",
    "execute_structured_completion",
    "request_structured_value",
]
