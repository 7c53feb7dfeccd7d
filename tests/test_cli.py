# File: tests/test_cli.py
"""Тесты для CLI с использованием click.testing.CliRunner.
Проверяют --version, число аргументов, коды выхода и обработку ошибок стартового URL.
"""
import importlib

import pytest
from click.testing import CliRunner

from site_walker.cli import cli
from site_walker.crawler.models import CrawlReport
from site_walker.errors import NotScheduled, SubdomainError

cli_module = importlib.import_module("site_walker.cli")


@pytest.fixture(autouse=True)
def isolate(tmp_path, monkeypatch):
    """Без configs/default.yaml и без перенастройки логгера."""
    monkeypatch.chdir(tmp_path)
    logging_calls = []
    monkeypatch.setattr(cli_module, "init_logging", lambda **kwargs: logging_calls.append(kwargs))
    return logging_calls


@pytest.fixture()
def fake_crawl(monkeypatch):
    calls = []

    async def _fake(seed, cfg, sink):
        calls.append((seed, cfg))
        sink.emit(seed, {f"{seed}a"})
        return CrawlReport(seed=seed, visited=[seed])

    monkeypatch.setattr(cli_module, "start_crawl", _fake)
    return calls


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteWalker" in result.output


def test_crawl_ok(fake_crawl):
    result = CliRunner().invoke(cli, ["https://example.com/"])
    assert result.exit_code == 0
    assert fake_crawl[0][0] == "https://example.com/"
    assert "--https://example.com/a" in result.output


def test_config_file_is_picked_up(tmp_path, fake_crawl):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_concurrency: 2\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["https://example.com/"])
    assert result.exit_code == 0
    assert fake_crawl[0][1].max_concurrency == 2


def test_bad_config_file(tmp_path, fake_crawl):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_concurrency: -1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["https://example.com/"])
    assert result.exit_code == 1
    assert fake_crawl == []


@pytest.mark.parametrize("args", [[], ["https://a.example/", "https://b.example/"]])
def test_argument_count(args, fake_crawl):
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 1
    assert "please specify a single URL argument" in result.output
    assert fake_crawl == []


@pytest.mark.parametrize("error", [SubdomainError("mailto:x@example.com"), NotScheduled("http://example.com/")])
def test_fatal_errors(monkeypatch, error):
    async def _fail(seed, cfg, sink):
        raise error

    monkeypatch.setattr(cli_module, "start_crawl", _fail)
    result = CliRunner().invoke(cli, ["mailto:x@example.com"])
    assert result.exit_code == 1
    assert str(error) in result.output


def test_unparseable_seed_fails_before_network():
    result = CliRunner().invoke(cli, ["example.com"])
    assert result.exit_code == 1
    assert "Unable to parse URL" in result.output


def test_seed_without_host():
    result = CliRunner().invoke(cli, ["mailto:someone@example.com"])
    assert result.exit_code == 1
    assert "subdomain" in result.output


def test_package_does_not_shadow_cli_module():
    import site_walker

    assert not hasattr(site_walker, "cli") or site_walker.cli is cli_module
    assert cli_module.start_crawl.__module__ == "site_walker.engine"


def test_logging_settings_from_config(tmp_path, fake_crawl, isolate):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "log_level: DEBUG\nlog_file: walker.log\n", encoding="utf-8"
    )
    result = CliRunner().invoke(cli, ["https://example.com/"])
    assert result.exit_code == 0
    assert isolate == [{"level": "DEBUG", "log_file": "walker.log"}]
