"""
Page fetcher for government listing sites.

Returns parsed BeautifulSoup documents. Government sites frequently serve
broken certificate chains, wrong content-types and error statuses on pages
that render fine, so the default policy is lax: TLS is not verified and
HTTP error statuses still yield a document. Strict fetches are opt-in per call.
"""
import os
import time
import logging
from dataclasses import dataclass, replace
from typing import Optional

import httpx
from bs4 import BeautifulSoup
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

DEFAULT_UA = "GovtJobAggregator/1.0"
BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT_MS = 10000


class FetchError(Exception):
    """A page could not be fetched (transport failure or, for strict fetches, HTTP error)"""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class FetchPolicy:
    """
    Per-call fetch behaviour.

    lax: ignore HTTP error statuses and content-types and send a browser UA
    verify_tls: verify server certificates
    timeout_ms: connect + read timeout
    retries: extra attempts on timeouts and connection errors
    user_agent: overrides the UA chosen by `lax`
    """
    lax: bool = True
    verify_tls: bool = False
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retries: int = 0
    user_agent: Optional[str] = None

    def effective_user_agent(self) -> str:
        if self.user_agent:
            return self.user_agent
        return BROWSER_UA if self.lax else DEFAULT_UA


LAX = FetchPolicy()
STRICT = FetchPolicy(lax=False)


class PageFetcher:
    """Fetches and parses HTML pages with per-call policies"""

    def __init__(
        self,
        default_policy: Optional[FetchPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            default_policy: Policy for calls that don't pass one
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.default_policy = default_policy or LAX
        self._transport = transport

    def _headers(self, policy: FetchPolicy) -> dict:
        return {
            "User-Agent": policy.effective_user_agent(),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-IN,en;q=0.9",
        }

    async def _get(self, url: str, policy: FetchPolicy) -> httpx.Response:
        timeout = httpx.Timeout(policy.timeout_ms / 1000.0)
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            verify=policy.verify_tls,
            transport=self._transport,
        ) as client:
            start_time = time.time()
            response = await client.get(url, headers=self._headers(policy))
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.info(f"[net] GET {response.status_code} {url} ({len(response.content)} bytes, {elapsed_ms}ms)")
            return response

    async def fetch_page(
        self,
        url: str,
        timeout_ms: Optional[int] = None,
        policy: Optional[FetchPolicy] = None,
        lax: Optional[bool] = None,
        verify_tls: Optional[bool] = None,
    ) -> BeautifulSoup:
        """
        Fetch a page and parse it with lxml.

        Args:
            url: Absolute URL
            timeout_ms: Overrides the policy timeout for this call
            policy: Base fetch policy; defaults to the fetcher's default policy
            lax: Overrides the policy's lax flag for this call
            verify_tls: Overrides the policy's TLS verification for this call

        Returns:
            Parsed document

        Raises:
            FetchError: on transport failure, or HTTP status >= 400 when the
                policy is strict
        """
        policy = policy or self.default_policy
        overrides = {
            name: value
            for name, value in (('timeout_ms', timeout_ms), ('lax', lax), ('verify_tls', verify_tls))
            if value is not None
        }
        if overrides:
            policy = replace(policy, **overrides)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(policy.retries + 1),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
                reraise=True,
            ):
                with attempt:
                    response = await self._get(url, policy)
        except httpx.TimeoutException as e:
            logger.error(f"[net] Timeout fetching {url}: {e}")
            raise FetchError(url, "Timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"[net] HTTP error fetching {url}: {e}")
            raise FetchError(url, f"Request failed: {e}") from e

        if not policy.lax and response.status_code >= 400:
            raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        return BeautifulSoup(response.content, "lxml")


def build_fetcher(
    timeout_ms: Optional[int] = None,
    verify_tls: Optional[bool] = None,
    retries: Optional[int] = None,
    user_agent: Optional[str] = None,
) -> PageFetcher:
    """Build a fetcher whose default policy comes from arguments or environment"""
    if timeout_ms is None:
        timeout_ms = int(os.getenv("GOVTJOBS_FETCH_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
    if verify_tls is None:
        verify_tls = os.getenv("GOVTJOBS_VERIFY_TLS", "false").lower() == "true"
    if retries is None:
        retries = int(os.getenv("GOVTJOBS_FETCH_RETRIES", "0"))
    return PageFetcher(default_policy=FetchPolicy(
        lax=True,
        verify_tls=verify_tls,
        timeout_ms=timeout_ms,
        retries=retries,
        user_agent=user_agent,
    ))
