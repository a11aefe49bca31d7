"""Base interface for genealogy record providers."""
from __future__ import annotations

import logging
from abc import ABC
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from ..config import DEFAULT_USER_AGENT
from ..exceptions import ProviderError

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheableResult(Protocol):
    """What the match cache needs from any provider result."""

    @property
    def external_id(self) -> str: ...

    @property
    def link(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def snippet_text(self) -> str: ...

    def model_dump_json(self) -> str: ...


class UpstreamModel(BaseModel):
    """Base for decoding provider payloads.

    Every upstream field may be absent or null; nulls are dropped before
    validation so the declared defaults apply. Numbers arriving where a
    string is declared are kept as their string form.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class BaseSource(ABC):
    """Abstract base class for record providers.

    Each public operation performs exactly one outbound call and raises
    ProviderError when it does not succeed. No retries.
    """

    name: str = "base"
    display_name: str = "Base"
    base_url: str = ""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize the source.

        Args:
            client: Optional pre-built client (tests inject a MockTransport here)
            timeout: Network timeout for each call, in seconds
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        error_label: str = "API",
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        Raises:
            ProviderError: On transport failure, non-2xx status or a body
                that is not JSON
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            resp = await self._get_client().request(method, url, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", self.display_name, e)
            raise ProviderError(self.name, f"{self.display_name} request failed: {e}") from e

        if not resp.is_success:
            raise ProviderError(
                self.name,
                f"{self.display_name} {error_label} error: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(
                self.name,
                f"{self.display_name} returned a malformed response",
                status_code=resp.status_code,
            ) from e

    def _malformed(self, error: Exception) -> ProviderError:
        logger.warning("%s payload did not decode: %s", self.display_name, error)
        return ProviderError(self.name, f"{self.display_name} returned a malformed response")

    async def close(self) -> None:
        """Close HTTP client connection."""
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> BaseSource:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> bool:
        """Async context manager exit - ensures connection cleanup."""
        await self.close()
        return False
