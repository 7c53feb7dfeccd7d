# File: site_walker/cli.py
#!/usr/bin/env python3
"""
Точка входа для запуска обходчика SiteWalker через командную строку.

Использование:
  site-walker SEED

SEED - абсолютный URL со схемой. Обходятся все страницы того же хоста,
найденные ссылки печатаются в stdout. Настройки берутся из configs/default.yaml,
если файл есть, иначе используются значения по умолчанию.

Коды выхода: 0 - обход завершён, 1 - ошибка в стартовом URL или конфиге,
2 - ошибка использования (неизвестная опция).

Пример:
  site-walker https://example.com/
"""
import asyncio
import sys

import click

from site_walker import __version__
from site_walker.config import load_config
from site_walker.engine import start_crawl
from site_walker.errors import CrawlerError, InputMalformed
from site_walker.logger import init_logging
from site_walker.report import make_sink

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteWalker, version %(version)s')
@click.argument('seeds', nargs=-1, metavar='SEED')
def cli(seeds):
    """Обойти все страницы хоста SEED и вывести найденные ссылки."""
    if len(seeds) != 1:
        print_error(str(InputMalformed()))
    try:
        cfg = load_config(None)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    init_logging(level=cfg.log_level, log_file=cfg.log_file)
    sink = make_sink(cfg.output_format)
    try:
        asyncio.run(start_crawl(seeds[0], cfg, sink))
    except CrawlerError as e:
        print_error(str(e))


if __name__ == "__main__":
    cli()
