"""
Error taxonomy shared by the services and the HTTP layer.
"""

from typing import Optional


class YakoError(Exception):
    """Base class for errors raised by the chat pipeline."""


class InvalidInput(YakoError):
    """The caller sent something we cannot answer (e.g. an empty message)."""


class ProviderError(YakoError):
    """Contacting or parsing the external LLM provider failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InternalError(YakoError):
    """Unexpected failure while orchestrating a chat turn."""
