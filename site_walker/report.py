# File: site_walker/report.py
"""site_walker.report: приёмники результатов обхода (URL страницы и найденные на ней ссылки)."""

from __future__ import annotations

import json
import sys
from typing import Iterable, Literal, Optional, Protocol, TextIO

__all__ = ["ResultSink", "TextSink", "JsonLinesSink", "make_sink"]


class ResultSink(Protocol):
    def emit(self, source_url: str, links: Iterable[str]) -> None: ...


class TextSink:
    """
    Печатает URL страницы, затем по строке ``--ссылка`` на каждую ссылку и пустую строку.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def emit(self, source_url: str, links: Iterable[str]) -> None:
        lines = [source_url, *(f"--{link}" for link in sorted(links))]
        # один write на страницу, чтобы вывод параллельных воркеров не перемешивался
        self.stream.write("\n".join(lines) + "\n\n")
        self.stream.flush()


class JsonLinesSink:
    """Один JSON-объект ``{"url": ..., "links": [...]}`` на строку."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def emit(self, source_url: str, links: Iterable[str]) -> None:
        record = {"url": source_url, "links": sorted(links)}
        self.stream.write(json.dumps(record, ensure_ascii=False) + "\n")
        self.stream.flush()


def make_sink(fmt: Literal["text", "json"], stream: Optional[TextIO] = None) -> ResultSink:
    """Возвращает приёмник для формата из конфигурации."""
    if fmt == "json":
        return JsonLinesSink(stream)
    return TextSink(stream)
