# File: site_walker/crawler/crawler.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Set, Tuple
from urllib.parse import urlsplit, urlunsplit

from aiohttp import ClientSession

from site_walker.config import CrawlerConfig
from site_walker.crawler.fetcher import FetchError, Fetcher, create_session
from site_walker.crawler.fingerprint import ContentFilter
from site_walker.crawler.frontier import Frontier, FrontierClosed
from site_walker.crawler.link_extractor import extract_links, normalize_url
from site_walker.crawler.models import CrawlReport, PageData
from site_walker.crawler.robots import RobotsPolicy
from site_walker.crawler.url_filter import UrlFilter
from site_walker.errors import NotScheduled, SeedParseError, SubdomainError
from site_walker.report import ResultSink, make_sink

__all__ = ("AsyncCrawler", "parse_seed")


def parse_seed(seed: str) -> Tuple[str, str]:
    """
    Разбирает стартовый URL.

    Возвращает нормализованный URL и хост, по которому фильтруются ссылки.
    SeedParseError для URL без схемы или с некорректным портом, SubdomainError для URL без хоста.
    """
    raw = seed.strip()
    try:
        parts = urlsplit(raw)
        _ = parts.port
    except ValueError as exc:
        raise SeedParseError(seed, str(exc)) from exc
    if not parts.scheme:
        raise SeedParseError(seed, "relative URL without a base")
    if not parts.hostname:
        raise SubdomainError(seed)
    if parts.scheme.lower() not in ("http", "https"):
        raise SeedParseError(seed, f"unsupported scheme {parts.scheme!r}")
    return normalize_url(raw), parts.hostname


@dataclass
class _CrawlContext:
    """Всё состояние одного обхода: создаётся в начале crawl() и выбрасывается в конце."""
    frontier: Frontier
    url_filter: UrlFilter
    content_filter: ContentFilter
    slots: asyncio.Semaphore
    report: CrawlReport
    fetching: int = 0


class AsyncCrawler:
    """Асинхронный обходчик одного хоста с учётом robots.txt и дедупликацией URL и контента."""

    def __init__(self, config: Optional[CrawlerConfig] = None, sink: Optional[ResultSink] = None) -> None:
        self.config = config if config is not None else CrawlerConfig()
        self.sink: ResultSink = sink if sink is not None else make_sink(self.config.output_format)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger("SiteWalker")
        self._ctx: Optional[_CrawlContext] = None
        self._cancel_requested = False

    async def __aenter__(self) -> AsyncCrawler:
        self.session = create_session(self.config)
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed: str) -> CrawlReport:
        """Обходит все страницы хоста seed, доступные по ссылкам, и возвращает сводку."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self._cancel_requested = False
        root, subdomain = parse_seed(seed)
        self.logger.info("Старт обхода: %s", root)
        start = time.monotonic()

        robots = await self._load_robots(root)
        ctx = _CrawlContext(
            frontier=Frontier(self.config.frontier_capacity),
            url_filter=UrlFilter(subdomain, robots),
            content_filter=ContentFilter(),
            slots=asyncio.Semaphore(self.config.max_concurrency),
            report=CrawlReport(seed=root),
        )
        # seed skips admission but is recorded, so links back to it are rejected
        ctx.url_filter.mark_seen(root)
        try:
            await ctx.frontier.put(root)
        except FrontierClosed as exc:
            raise NotScheduled(root) from exc

        self._ctx = ctx
        try:
            # cancel() may arrive while robots.txt or the seed is still pending
            if self._cancel_requested:
                await self._close(ctx)
            await self._dispatch(ctx)
        finally:
            self._ctx = None

        report = ctx.report
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (ошибок %d, дубликатов %d)",
            len(report.visited), duration, len(report.failed), report.duplicate_content,
        )
        return report

    async def cancel(self) -> None:
        """
        Запрещает новые выборки из очереди; начатые страницы дорабатываются.
        Вызов до начала выборки (пока грузится robots.txt) тоже останавливает обход.
        """
        self._cancel_requested = True
        ctx = self._ctx
        if ctx is None:
            self.logger.info("Отмена запрошена до начала выборки")
            return
        await self._close(ctx)

    async def _close(self, ctx: _CrawlContext) -> None:
        self.logger.info("Обход отменён")
        ctx.report.cancelled = True
        await ctx.frontier.close()

    async def _dispatch(self, ctx: _CrawlContext) -> None:
        async with asyncio.TaskGroup() as tg:
            while True:
                await ctx.slots.acquire()
                url = await ctx.frontier.get()
                if url is None:
                    ctx.slots.release()
                    break
                tg.create_task(self._process(ctx, url))

    async def _process(self, ctx: _CrawlContext, url: str) -> None:
        try:
            try:
                links = await self._visit(ctx, url)
            finally:
                # the slot only covers fetch and parse; a put on a full frontier
                # must not block the dispatcher from draining it
                ctx.slots.release()
            await self._schedule(ctx, links)
        finally:
            await ctx.frontier.task_done()

    async def _visit(self, ctx: _CrawlContext, url: str) -> Set[str]:
        assert self.fetcher is not None
        ctx.report.visited.append(url)
        ctx.fetching += 1
        ctx.report.peak_fetches = max(ctx.report.peak_fetches, ctx.fetching)
        try:
            page = await self.fetcher.fetch(url)
        except FetchError as exc:
            self.logger.warning("Failed %s: %s", url, exc.reason)
            ctx.report.failed.append(url)
            return set()
        finally:
            ctx.fetching -= 1

        if not page.ok:
            self.logger.info("Skipping %s: HTTP %d", url, page.status)
            ctx.report.failed.append(url)
            return set()

        try:
            links = await asyncio.to_thread(self._parse, ctx.content_filter, page)
        except Exception as exc:
            self.logger.warning("Failed to extract links from %s: %s", url, exc)
            ctx.report.failed.append(url)
            return set()
        if links is None:
            self.logger.debug("Duplicate content at %s", url)
            ctx.report.duplicate_content += 1
            return set()

        admitted = ctx.url_filter.filter(links)
        self._emit(url, admitted)
        return admitted

    @staticmethod
    def _parse(content_filter: ContentFilter, page: PageData) -> Optional[Set[str]]:
        if content_filter.is_duplicate(page.content):
            return None
        return extract_links(page.url, page.content)

    def _emit(self, url: str, links: Set[str]) -> None:
        try:
            self.sink.emit(url, links)
        except Exception as exc:
            self.logger.error("Result sink failed for %s: %s", url, exc)

    async def _schedule(self, ctx: _CrawlContext, links: Set[str]) -> None:
        for link in sorted(links):
            try:
                await ctx.frontier.put(link)
            except FrontierClosed:
                self.logger.info("Frontier closed, dropping %s", link)

    async def _load_robots(self, root: str) -> RobotsPolicy:
        assert self.fetcher is not None
        parsed = urlsplit(root)
        robots_url = urlunsplit((parsed.scheme, parsed.netloc, "/robots.txt", "", ""))
        try:
            page = await self.fetcher.fetch(robots_url)
        except FetchError as exc:
            self.logger.warning("Error loading robots.txt, allowing all: %s", exc.reason)
            return RobotsPolicy.allow_all()
        if not page.ok:
            self.logger.debug("robots.txt %s -> HTTP %s", robots_url, page.status)
            return RobotsPolicy.allow_all()
        return RobotsPolicy(page.content)
