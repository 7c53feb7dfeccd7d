# File: site_walker/crawler/__init__.py
"""Crawl orchestration: frontier, admission filters, dedup stores and the crawler itself."""
from site_walker.crawler.crawler import AsyncCrawler, parse_seed
from site_walker.crawler.frontier import Frontier, FrontierClosed, FrontierState
from site_walker.crawler.models import CrawlReport, PageData

__all__ = (
    "AsyncCrawler",
    "CrawlReport",
    "Frontier",
    "FrontierClosed",
    "FrontierState",
    "PageData",
    "parse_seed",
)
