"""
Base client for external data source clients.

Provides: a lazily created aiohttp session, per-attempt timeouts, retry with
exponential backoff and jitter, a post-request rate-limit delay, and
structured logging that never includes the API key.
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from citation_scout.constants import (
    RATE_LIMIT_MIN_BACKOFF,
    REQUEST_DELAY_WITH_KEY,
    REQUEST_DELAY_WITHOUT_KEY,
)
from citation_scout.models.model_citation import PubmedConfig, RawResponse

logger = logging.getLogger("citation_scout.data_sources")

_REQUEST_HEADERS = {"Accept": "application/json, text/xml"}


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "pubmed"
    method: str  # e.g. "esearch"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class RateLimitError(DataSourceError):
    """Raised when rate limit is exceeded and retries are exhausted."""

    pass


def is_rate_limited(error: Exception) -> bool:
    """True if the failure looks like the service throttling us."""
    if isinstance(error, DataSourceError) and error.status_code == 429:
        return True
    message = str(error).lower()
    return "429" in message or "rate limit" in message


def backoff_delay(attempt: int, rate_limited: bool = False) -> float:
    """Seconds to wait after failed attempt number `attempt` (0-based)."""
    delay = 2**attempt + random.uniform(0, 1)
    if rate_limited:
        delay = max(delay, RATE_LIMIT_MIN_BACKOFF)
    return delay


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for the PubMed client.

    Subclasses implement `_source_name` and their own typed methods that
    call `fetch_with_retry()`.
    """

    def __init__(self, config: PubmedConfig | None = None):
        self.config = config or PubmedConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'pubmed'."""
        ...

    @property
    def request_delay(self) -> float:
        """Pause after every successful request to stay under the rate ceiling."""
        return REQUEST_DELAY_WITH_KEY if self.config.api_key else REQUEST_DELAY_WITHOUT_KEY

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=_REQUEST_HEADERS)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request with retry + rate limiting ----------------------------

    async def fetch_with_retry(
        self,
        url: str,
        params: dict[str, Any],
        timeout: float | None = None,
        *,
        context: RequestContext | None = None,
    ) -> RawResponse:
        """
        GET `url` with retry, backoff and the post-request rate-limit delay.

        Parameters
        ----------
        url : str
            Endpoint URL without query string.
        params : dict
            Query string parameters; URL-encoded by aiohttp.
        timeout : float, optional
            Per-attempt timeout in seconds. Defaults to `config.timeout_short`.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        DataSourceError
            When every attempt failed. RateLimitError if the last failure
            was a rate limit.
        """
        ctx = context or RequestContext(source=self._source_name, method="get")
        timeout = timeout if timeout is not None else self.config.timeout_short
        max_attempts = self.config.max_retries

        request_params = {key: str(value) for key, value in params.items()}
        if self.config.api_key:
            request_params["api_key"] = self.config.api_key

        client_timeout = aiohttp.ClientTimeout(total=timeout)

        for attempt in range(max_attempts):
            try:
                if self.config.log_network_requests:
                    logger.debug(
                        "Request [%s.%s] attempt=%d/%d url=%s params=%s",
                        ctx.source,
                        ctx.method,
                        attempt + 1,
                        max_attempts,
                        url,
                        {k: v for k, v in request_params.items() if k != "api_key"},
                    )

                session = await self._get_session()
                resp = await session.get(
                    url, params=request_params, timeout=client_timeout
                )
                body = await resp.text()

                if not 200 <= resp.status < 300:
                    error_cls = RateLimitError if resp.status == 429 else DataSourceError
                    raise error_cls(
                        ctx.source,
                        f"HTTP {resp.status}: {resp.reason or body[:200]}",
                        status_code=resp.status,
                    )

                await asyncio.sleep(self.request_delay)

                return RawResponse(
                    status=resp.status,
                    status_text=resp.reason or "",
                    headers={str(k): str(v) for k, v in resp.headers.items()},
                    data=body,
                )

            except asyncio.TimeoutError:
                last_error = DataSourceError(ctx.source, f"Timeout after {timeout:.1f}s")
            except aiohttp.ClientError as e:
                error_cls = RateLimitError if is_rate_limited(e) else DataSourceError
                last_error = error_cls(ctx.source, f"Connection error: {e}")
            except DataSourceError as e:
                last_error = e

            rate_limited = isinstance(last_error, RateLimitError)
            logger.warning(
                "Request error [%s.%s] attempt=%d/%d: %s",
                ctx.source,
                ctx.method,
                attempt + 1,
                max_attempts,
                last_error,
            )

            if attempt < max_attempts - 1:
                delay = backoff_delay(attempt, rate_limited)
                if rate_limited:
                    logger.warning("Rate limit likely hit, backing off %.2fs", delay)
                else:
                    logger.warning("Retrying in %.2f seconds...", delay)
                await asyncio.sleep(delay)
                continue

            logger.error(
                "All retries exhausted [%s.%s]: %s", ctx.source, ctx.method, last_error
            )
            raise last_error

        raise DataSourceError(ctx.source, "Max retries reached without response")
