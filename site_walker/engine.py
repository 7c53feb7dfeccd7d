# File: site_walker/engine.py
"""site_walker.engine: точка входа для запуска обхода из CLI и тестов."""

from __future__ import annotations

from typing import Optional

from site_walker.config import CrawlerConfig
from site_walker.crawler.crawler import AsyncCrawler
from site_walker.crawler.models import CrawlReport
from site_walker.logger import logger
from site_walker.report import ResultSink

__all__ = ["start_crawl"]


async def start_crawl(
    seed: str,
    config: Optional[CrawlerConfig] = None,
    sink: Optional[ResultSink] = None,
) -> CrawlReport:
    """Открывает HTTP-сессию, обходит сайт seed и закрывает сессию."""
    cfg = config if config is not None else CrawlerConfig()
    logger.debug("Concurrency %d, frontier capacity %d", cfg.max_concurrency, cfg.frontier_capacity)
    async with AsyncCrawler(cfg, sink) as crawler:
        return await crawler.crawl(seed)
