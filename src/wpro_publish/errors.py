"""Exceptions raised while publishing a component."""

from typing import Any


class PublishError(Exception):
    """Base exception for fatal publish failures.

    ``exit_code`` is the process status the CLI exits with when this error
    reaches the top level.
    """

    exit_code = 1


class ConfigurationError(PublishError):
    """Base URL or access token is missing."""

    exit_code = 2


class DocumentError(PublishError):
    """The component YAML file could not be read or is invalid."""

    exit_code = 3


class ServicePublishError(PublishError):
    """The full service publish request failed."""

    exit_code = 4


class ApiError(Exception):
    """HTTP-level failure talking to the API.

    ``status_code`` is ``None`` when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        full_message = message
        if response:
            text = str(response)
            full_message = f"{message} - Response: {text[:500] if len(text) > 500 else text}"
        super().__init__(full_message)
        self.status_code = status_code
        self.response = response
