# File: tests/helpers.py
"""Shared test helpers: a local fake site and an in-memory result sink."""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Set, Tuple

from aiohttp import web


class CollectingSink:
    """Result sink that keeps everything in memory."""

    def __init__(self) -> None:
        self.records: Dict[str, Set[str]] = {}
        self.calls: List[str] = []

    def emit(self, source_url: str, links) -> None:
        self.calls.append(source_url)
        self.records[source_url] = set(links)


class FakeSite:
    """
    Local test site: serves fixed (status, body) pairs by path and records every request.
    Unknown paths get 404.
    """

    def __init__(self) -> None:
        self.base = ""
        self.pages: Dict[str, Tuple[int, str]] = {}
        self.prefixes: Dict[str, Tuple[int, str]] = {}
        self.delays: Dict[str, float] = {}
        self.failures: Dict[str, int] = {}
        self.requests: List[str] = []
        self.active = 0
        self.peak = 0

    def add(self, path: str, body: str = "", status: int = 200) -> None:
        self.pages[path] = (status, body)

    def url(self, path: str) -> str:
        return f"{self.base}{path}"

    def page_requests(self) -> List[str]:
        return [p for p in self.requests if p != "/robots.txt"]

    def _lookup(self, path: str) -> Tuple[int, str]:
        if path in self.pages:
            return self.pages[path]
        for prefix, page in self.prefixes.items():
            if path.startswith(prefix):
                return page
        return 404, "<html><body>Not found</body></html>"

    async def handle(self, request: web.Request) -> web.Response:
        path = request.path_qs
        self.requests.append(path)
        counted = path != "/robots.txt"
        if counted:
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            delay = self.delays.get(request.path, 0.0)
            if delay:
                await asyncio.sleep(delay)
            if self.failures.get(path, 0) > 0:
                self.failures[path] -= 1
                return web.Response(status=500, text="boom")
            status, body = self._lookup(path)
            return web.Response(status=status, text=body, content_type="text/html")
        finally:
            if counted:
                self.active -= 1


def html(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


