# File: site_walker/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteWalker.
"""
from __future__ import annotations

import logging
import posixpath
import re
from typing import Set
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger("SiteWalker")

_SKIP_PREFIXES = ("mailto:", "javascript:", "tel:", "data:")
_DEFAULT_PORTS = {"http": 80, "https": 443}
_ESCAPE_RE = re.compile(r"%[0-9a-fA-F]{2}")
_UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~")


def extract_links(base_url: str, body: str) -> Set[str]:
    """
    Extract absolute HTTP(S) links from an HTML body.

    Relative hrefs are resolved against ``base_url``; hrefs that cannot be
    resolved are dropped. Off-domain links are kept, filtering is up to the caller.
    """
    soup = BeautifulSoup(body, "html.parser")
    links: Set[str] = set()
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIP_PREFIXES):
            continue
        try:
            absolute = normalize_url(urljoin(base_url, raw))
        except ValueError as exc:
            logger.debug("Dropping href %r on %s: %s", raw, base_url, exc)
            continue
        parsed = urlsplit(absolute)
        if parsed.scheme in ("http", "https") and parsed.hostname:
            links.add(absolute)
    return links


def normalize_url(url: str) -> str:
    """
    Приводит URL к ключу дедупликации: схема и хост в нижнем регистре,
    порт по умолчанию (80 для http, 443 для https) убирается, точечные сегменты
    пути разрешаются. %-последовательности незарезервированных символов раскрываются,
    остальные пишутся в верхнем регистре. Фрагмент отбрасывается.
    Пустой путь становится "/", порядок параметров запроса сохраняется.

    Raises ValueError for URLs that cannot be parsed (e.g. a bad port).
    """
    parsed = urlsplit(url)
    # accessing .port validates it
    port = parsed.port
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        netloc = netloc.rsplit(":", 1)[0]
    path = _normalize_path(parsed.path)
    query = _normalize_escapes(parsed.query)
    return urlunsplit((scheme, netloc, path, query, ""))


def _normalize_path(path: str) -> str:
    if not path:
        return "/"
    norm = posixpath.normpath(_normalize_escapes(path))
    # "/a/b/" and "/a/b/.." both end on a directory
    if path.endswith(("/", "/.", "/..")) and not norm.endswith("/"):
        norm += "/"
    if not norm.startswith("/"):
        norm = "/" + norm
    return norm


def _normalize_escapes(text: str) -> str:
    def _fix(match: re.Match) -> str:
        char = chr(int(match.group(0)[1:], 16))
        return char if char in _UNRESERVED else match.group(0).upper()

    return _ESCAPE_RE.sub(_fix, text)
