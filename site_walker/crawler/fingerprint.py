# File: site_walker/crawler/fingerprint.py
"""
Content fingerprints for detecting the same page served at different URLs.
"""
from __future__ import annotations

import hashlib
from typing import Optional

from site_walker.crawler.store import DedupStore


def digest(body: str) -> str:
    """Return the SHA-256 hex digest of a page body."""
    return hashlib.sha256(body.encode("utf-8", errors="surrogatepass")).hexdigest()


class ContentFilter:
    """Remembers digests of processed bodies."""

    def __init__(self, store: Optional[DedupStore[str]] = None) -> None:
        self.store: DedupStore[str] = store if store is not None else DedupStore()

    def is_duplicate(self, body: str) -> bool:
        # recording happens on the first call, so only later calls report True
        return not self.store.insert(digest(body))
