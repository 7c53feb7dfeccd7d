# File: site_walker/logger.py
"""
Настройка логгера SiteWalker.

Все модули пишут в один именованный логгер ``SiteWalker``::

    from site_walker.logger import logger
    logger.info("Старт обхода")

Консольный вывод идёт в stderr, stdout занят найденными ссылками.
Если в конфиге задан ``log_file``, записи дублируются в файл с ротацией.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "SiteWalker"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

#: ротация файла лога: 5 MiB, три архивных файла
MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]
_PathT = Union[str, Path]


def _build_handlers(log_file: Optional[_PathT], fmt: str) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _drop_handlers(lg: logging.Logger) -> None:
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[_PathT] = None,
    log_format: str = LOG_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """
    Перенастраивает логгер SiteWalker.

    level            - уровень, числом или строкой ("DEBUG", ...)
    log_file         - путь к файлу лога; None - только stderr
    log_format       - формат для logging.Formatter
    replace_handlers - True убирает старые обработчики, False добавляет к ним
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        _drop_handlers(lg)
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "WARNING", log_file: Optional[_PathT] = None) -> logging.Logger:
    """Настройка из CLI: уровень и файл берутся из CrawlerConfig."""
    return configure(level=level, log_file=log_file, replace_handlers=True)


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["LOGGER_NAME", "configure", "init_logging", "logger"]
