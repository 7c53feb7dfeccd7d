# File: site_walker/errors.py
"""site_walker.errors: исключения, которые прерывают обход целиком."""

from __future__ import annotations

__all__ = (
    "CrawlerError",
    "SeedParseError",
    "SubdomainError",
    "NotScheduled",
    "InputMalformed",
)


class CrawlerError(Exception):
    """Базовое исключение SiteWalker."""


class SeedParseError(CrawlerError, ValueError):
    """Стартовый URL не удалось разобрать."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        msg = f"Unable to parse URL {url!r}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class SubdomainError(CrawlerError):
    """У стартового URL нет хоста."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Could not extract the subdomain from the URL {url!r}")


class NotScheduled(CrawlerError):
    """URL не удалось поставить в очередь."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"The URL {url!r} could not be scheduled")


class InputMalformed(CrawlerError):
    def __init__(self) -> None:
        super().__init__("please specify a single URL argument")
