# File: tests/test_cli.py
"""Тесты для CLI (`crawlcore.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import json

import pytest
from click.testing import CliRunner

import crawlcore.cli as cli_module
from crawlcore.cli import cli
from crawlcore.crawler.models import CrawlStats, Page
from crawlcore.errors import InvalidSeed

QUIET = ["--log-level", "ERROR"]


@pytest.fixture(autouse=True)
def patch_run_crawl(monkeypatch):
    """Патчим run_crawl для возвращения фиктивных страниц без обхода."""
    calls = []
    pages = [
        Page("http://example.com/", 0, "<html></html>", ("http://example.com/a",)),
        Page("http://example.com/a", 1, "<html>a</html>"),
    ]

    async def fake_run(seed, cfg):
        calls.append((seed, cfg))
        return pages, CrawlStats(pages_stored=len(pages))

    monkeypatch.setattr(cli_module, "run_crawl", fake_run)
    return calls


def write_config(tmp_path, data: dict):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps(data), encoding="utf-8")
    return cfg_file


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "CrawlCore" in result.output


def test_show_config_defaults():
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_depth"] == 3
    assert data["user_agent"] == "CrawlCore/0.1"


def test_show_config_from_file(tmp_path):
    cfg_file = write_config(tmp_path, {"max_depth": 1, "user_agent": "Agent/1.0"})
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_depth"] == 1
    assert data["user_agent"] == "Agent/1.0"


def test_bad_config_file(tmp_path):
    cfg_file = write_config(tmp_path, {"max_depth": -5})
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_crawl_stdout(patch_run_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "http://example.com/"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert [p["url"] for p in output["pages"]] == ["http://example.com/", "http://example.com/a"]
    assert output["seed"] == "http://example.com/"
    assert output["stats"]["pages_stored"] == 2
    assert patch_run_crawl[0][0] == "http://example.com/"


def test_crawl_overrides_reach_config(tmp_path, patch_run_crawl):
    cfg_file = write_config(tmp_path, {"max_depth": 5, "user_agent": "FromFile/1.0"})
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [*QUIET, "--config", str(cfg_file), "crawl", "http://example.com/",
         "--depth", "1", "--concurrency", "3", "--delay", "0.5", "--max-pages", "7"],
    )
    assert result.exit_code == 0
    _, cfg = patch_run_crawl[0]
    assert cfg.max_depth == 1
    assert cfg.concurrency_limit == 3
    assert cfg.min_request_interval_per_host == 0.5
    assert cfg.max_pages_per_domain == 7
    assert cfg.user_agent == "FromFile/1.0"


def test_crawl_invalid_override():
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "http://example.com/", "--concurrency", "0"])
    assert result.exit_code == 1
    assert "Некорректные параметры" in result.output


def test_crawl_json_file(tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "http://example.com/", "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages"][0]["url"] == "http://example.com/"
    assert data["hosts"] == {"example.com": 2}


def test_crawl_html_file(tmp_path):
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "http://example.com/", "--html", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert "http://example.com/a" in out.read_text(encoding="utf-8")


def test_crawl_error_is_reported(monkeypatch):
    async def invalid(seed, cfg):
        raise InvalidSeed(seed)

    monkeypatch.setattr(cli_module, "run_crawl", invalid)
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "not-a-url"])
    assert result.exit_code == 1
    assert "Ошибка при обходе" in result.output


def test_crawl_timeout(monkeypatch):
    async def slow(seed, cfg):
        await asyncio.sleep(2)
        return [], CrawlStats()

    monkeypatch.setattr(cli_module, "run_crawl", slow)
    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "crawl", "http://example.com/", "--crawl-timeout", "0.2"])
    assert result.exit_code != 0
    assert "не завершён" in result.output


def test_summary_is_logged(tmp_path):
    log_file = tmp_path / "crawl.log"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--log-level", "INFO", "--log-file", str(log_file), "crawl", "http://example.com/",
         "--json", str(tmp_path / "r.json")],
    )
    assert result.exit_code == 0
    text = log_file.read_text(encoding="utf-8")
    assert "Crawl Report (Top 5 pages)" in text
    assert "- URL: http://example.com/a | Depth: 1" in text
