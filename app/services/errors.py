"""Failure taxonomy for content assemblies.

``NotFound`` and *absent* are not exceptions: the assembler returns ``None``
for those outcomes.  Only failures that the caller may want to retry are
raised.
"""

from typing import Optional


class ContentError(Exception):
    """Base class for errors raised while fetching CMS content."""


class TransportError(ContentError):
    """Network or HTTP-level failure, including non-2xx and malformed envelopes."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(TransportError):
    """The CMS credentials or space are not configured."""


class SchemaMismatchError(ContentError):
    """GraphQL rejected a field or type unknown to the configured content space."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = messages
