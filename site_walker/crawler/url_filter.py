# File: site_walker/crawler/url_filter.py
"""
Admission check for discovered links: same host, allowed by robots.txt, not seen before.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Set
from urllib.parse import urlsplit

from site_walker.crawler.robots import DEFAULT_AGENT, RobotsPolicy
from site_walker.crawler.store import DedupStore

logger = logging.getLogger("SiteWalker")


class UrlFilter:
    """Composes subdomain matching, robots policy and URL-level dedup."""

    def __init__(
        self,
        subdomain: str,
        robots: RobotsPolicy,
        store: Optional[DedupStore[str]] = None,
        user_agent: str = DEFAULT_AGENT,
    ) -> None:
        self.subdomain = subdomain.lower()
        self.robots = robots
        self.store: DedupStore[str] = store if store is not None else DedupStore()
        self.user_agent = user_agent

    def admit(self, url: str) -> bool:
        """
        Return True if ``url`` should be scheduled.

        Checks run cheapest first and short-circuit; the dedup store is only
        touched for same-host, robots-allowed URLs.
        """
        try:
            host = urlsplit(url).hostname
        except ValueError:
            logger.debug("Rejecting unparseable URL %r", url)
            return False
        if host != self.subdomain:
            return False
        if not self.robots.allowed(url, self.user_agent):
            logger.debug("Disallowed by robots.txt: %s", url)
            return False
        return self.store.insert(url)

    def filter(self, urls: Iterable[str]) -> Set[str]:
        return {url for url in urls if self.admit(url)}

    def mark_seen(self, url: str) -> bool:
        """Record ``url`` as scheduled without the host and robots checks."""
        return self.store.insert(url)
