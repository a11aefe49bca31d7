"""Error taxonomy for provider lookups and the match cache."""
from __future__ import annotations


class ResearchSourcesError(Exception):
    """Base exception for all research-sources errors."""


class ValidationError(ResearchSourcesError):
    """Raised when an incoming request is malformed or incomplete.

    Always raised before any outbound call is made.
    """


class ProviderError(ResearchSourcesError):
    """Raised when a single provider call does not succeed.

    Covers non-2xx responses, transport failures and bodies that cannot be
    decoded. Scoped to one source: the orchestrator records it in that
    source's slot instead of propagating it.
    """

    def __init__(self, source: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.source = source
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class CacheWriteError(ResearchSourcesError):
    """Raised when the match cache cannot persist a row."""
