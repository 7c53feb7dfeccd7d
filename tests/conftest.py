# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from helpers import CollectingSink, FakeSite, serve_app
from site_walker.config import CrawlerConfig


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[FakeSite]:
    fake = FakeSite()
    app = web.Application()
    app.router.add_get("/{tail:.*}", fake.handle)
    async for base in serve_app(app, unused_tcp_port):
        fake.base = base
        yield fake


@pytest.fixture()
def config() -> CrawlerConfig:
    """Fast config for tests: short timeout, no retries."""
    return CrawlerConfig(max_concurrency=4, timeout=2.0, retry_times=0, backoff_base=0.01)


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()
