"""
Name: User-facing error messages

Responsibilities:
  - Turn any error raised by an API call into one string for a notification
  - Flatten "Validation failed" field maps into a single sentence list

Collaborators:
  - crosscutting.exceptions (ApiError carries the parsed envelope)
  - application stores/use cases (login/signup errors, page notifications)
"""

from __future__ import annotations

from typing import Final

from .exceptions import ApiError

VALIDATION_FAILED_MESSAGE: Final[str] = "Validation failed"
DEFAULT_FALLBACK: Final[str] = "Operation failed"


def flatten_field_errors(field_errors: object) -> list[str]:
    """Values of a field->message map, in order, skipping empty ones."""
    if not isinstance(field_errors, dict):
        return []
    return [str(message) for message in field_errors.values() if message]


def get_error_message(error: object, fallback: str = DEFAULT_FALLBACK) -> str:
    """
    Extract the message to show for a failed call.

    - Validation errors: field messages joined with ". "
    - Otherwise the envelope message, or `fallback` when the server sent none
      (network failures, non-JSON bodies, unexpected exceptions).
    """
    if not isinstance(error, ApiError) or not error.payload:
        return fallback

    message = error.server_message
    if message == VALIDATION_FAILED_MESSAGE:
        field_messages = flatten_field_errors(error.data)
        if field_messages:
            return ". ".join(field_messages)

    return message or fallback
