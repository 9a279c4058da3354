import json
from unittest.mock import Mock

import pytest
from dependency_injector import providers

from doccrawl.cli import main
from doccrawl.container import Container
from doccrawl.domain.crawl_result import CrawlResult, CrawlStatus
from doccrawl.domain.settings import CrawlerSettings, Settings
from doccrawl.exceptions import RendererInitError


def _container(tmp_path, crawler=None):
    container = Container()
    container.settings.override(providers.Object(Settings(
        docs_base_path=str(tmp_path),
        crawler=CrawlerSettings(
            default_max_depth=2,
            default_rate_limit=2,
            page_timeout_ms=5000,
            user_agent="TestBot/1.0",
            fetch_mode="http",
        ),
    )))
    if crawler is not None:
        container.crawler.override(providers.Object(crawler))
    return container


def _result(errors=()):
    return CrawlResult(
        success=not errors,
        stats=CrawlStatus(discovered=2, processed=2, saved=2 - len(errors), errors=len(errors)),
        saved_files=("/docs/tools/example/index.md",),
        errors=tuple(errors),
        category="tools",
        name="example",
    )


def test_crawl_json_output(tmp_path, capsys):
    crawler = Mock()
    crawler.crawl.return_value = _result()

    code = main(
        ["crawl", "https://docs.example.com", "--max-depth", "1", "--include", "*/guide/*",
         "--include", "*/ref/*", "--exclude", "*/blog/*", "--force-refresh", "--output", "json"],
        container=_container(tmp_path, crawler),
    )

    assert code == 0
    options = crawler.crawl.call_args.args[0]
    assert options.max_depth == 1
    assert options.rate_limit is None
    assert options.force_refresh is True
    assert options.include_patterns == ("*/guide/*", "*/ref/*")
    assert options.exclude_patterns == ("*/blog/*",)
    assert options.on_progress is None
    out = json.loads(capsys.readouterr().out)
    assert out["stats"]["saved"] == 2
    assert out["category"] == "tools"


def test_crawl_table_output_reports_errors(tmp_path, capsys):
    crawler = Mock()
    crawler.crawl.return_value = _result(errors=["Failed to process https://docs.example.com/x: boom"])

    code = main(["crawl", "https://docs.example.com"], container=_container(tmp_path, crawler))

    assert code == 1
    out = capsys.readouterr().out
    assert "tools/example" in out
    assert "! Failed to process https://docs.example.com/x: boom" in out
    assert crawler.crawl.call_args.args[0].on_progress is not None


def test_crawl_rejects_invalid_url(tmp_path, capsys):
    crawler = Mock()
    code = main(["crawl", "docs.example.com"], container=_container(tmp_path, crawler))
    assert code == 2
    crawler.crawl.assert_not_called()


def test_crawl_renderer_init_failure(tmp_path, capsys):
    crawler = Mock()
    crawler.crawl.side_effect = RendererInitError("headless_chromium", RuntimeError("no browser"))
    code = main(["crawl", "https://docs.example.com"], container=_container(tmp_path, crawler))
    assert code == 1
    assert "no browser" in capsys.readouterr().err


def test_list_with_stats(tmp_path, capsys):
    container = _container(tmp_path)
    storage = container.storage()
    storage.write_file(storage.index_path("tools", "example"), "12345")
    storage.write_file(storage.index_path("apis", "stripe"), "abc")

    code = main(["list", "--stats"], container=container)

    assert code == 0
    out = capsys.readouterr().out
    assert "tools (1)" in out
    assert "example: 1 files, 5 bytes" in out
    assert "apis (1)" in out


def test_list_single_category(tmp_path, capsys):
    container = _container(tmp_path)
    storage = container.storage()
    storage.write_file(storage.index_path("tools", "example"), "x")

    main(["list", "--category", "apis"], container=container)

    out = capsys.readouterr().out
    assert "apis (0)" in out
    assert "tools" not in out


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["explode"])
