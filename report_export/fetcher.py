from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ReportFetchError(Exception):
    """The report URL answered with a non-success status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"GET {url} returned {status_code}")
        self.url = url
        self.status_code = status_code


class ReportFetcher:
    """Downloads report JSON documents.

    timeout=None waits indefinitely. transport is for tests
    (httpx.MockTransport).
    """

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str) -> Any:
        logger.info("Fetching report JSON from %s", url)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            r = await client.get(url)
        if not r.is_success:
            raise ReportFetchError(url, r.status_code)
        return r.json()
