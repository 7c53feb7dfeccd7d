# File: site_walker/crawler/models.py
"""
Data models for the SiteWalker crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class PageData:
    """Requested URL, HTTP status and decoded body of a fetched page."""

    url: str
    status: int
    content: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True)
class CrawlReport:
    """Summary of a finished crawl. Links themselves go to the result sink."""

    seed: str
    visited: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    duplicate_content: int = 0
    peak_fetches: int = 0
    cancelled: bool = False
