# File: site_walker/crawler/fetcher.py
"""
Fetcher module: HTTP GET with retry/backoff. Timeouts come from the session.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_walker.config import CrawlerConfig
from site_walker.crawler.models import PageData

logger = logging.getLogger("SiteWalker")

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)
MAX_BACKOFF = 60.0


class FetchError(Exception):
    """The page could not be retrieved at all (transport error or timeout)."""

    def __init__(self, url: str, reason: BaseException | str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


def create_session(config: CrawlerConfig) -> ClientSession:
    """Build the shared client session with timeout and User-Agent header."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Handles HTTP fetching with retries/backoff."""

    def __init__(
        self,
        session: ClientSession,
        config: CrawlerConfig,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.session = session
        self.config = config
        self._retry_status = retry_status

    async def fetch(self, url: str) -> PageData:
        """
        GET ``url`` and return its status and body.

        Retryable statuses (5xx, 429) are retried; once retries are used up the
        last response is returned as is. Transport errors and timeouts are
        retried too and raise FetchError when retries run out.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    text = await resp.text(errors="replace")
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, exc) from exc
                await self._backoff(url, attempts, exc)
                continue

            if status in self._retry_status and attempts < self.config.retry_times:
                attempts += 1
                await self._backoff(url, attempts, f"status {status}")
                continue
            return PageData(url, status, text)

    async def _backoff(self, url: str, attempt: int, reason: object) -> None:
        delay = min(self.config.backoff_base * 2 ** (attempt - 1), MAX_BACKOFF)
        logger.debug(
            "Retry %d/%d for %s after %.2f s (%s)",
            attempt, self.config.retry_times, url, delay, reason,
        )
        await asyncio.sleep(delay)
