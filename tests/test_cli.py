"""Tests for the command-line entry point."""
import pytest

from conftest import SEED, FakeWeb, page
from pagecrawler import cli


@pytest.fixture
def web(monkeypatch):
    web = FakeWeb({
        SEED: page("/a", "/b"),
        "https://example.com/a": page(),
    })

    class StubFetcher:
        def __init__(self, timeout_s, user_agent):
            web.timeout_s = timeout_s
            web.user_agent = user_agent

        def fetch(self, url):
            return web.fetch(url)

        def close(self):
            web.close()

    monkeypatch.setattr("pagecrawler.core.Fetcher", StubFetcher)
    return web


def test_successful_run(web, tmp_path, capsys):
    out = tmp_path / "pages"
    code = cli.main(["--url", SEED, "--output", str(out), "--depth", "1", "--max-pages", "5"])

    assert code == 0
    captured = capsys.readouterr()
    assert "Crawl finished. Pages downloaded: 2" in captured.out
    assert "CRAWL SUMMARY" in captured.err
    assert "https://example.com/b" in captured.err
    assert (out / "example.com_a.html").exists()
    assert web.closed


def test_defaults(web, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-u", SEED, "--quiet"]) == 0
    assert (tmp_path / "downloads" / "example.com_.html").exists()
    assert web.timeout_s == 30.0
    assert web.user_agent.startswith("Mozilla/5.0")
    captured = capsys.readouterr()
    assert captured.err == ""


def test_short_options(web, tmp_path, capsys):
    code = cli.main(["-u", SEED, "-o", str(tmp_path), "-d", "0", "-m", "1"])
    assert code == 0
    assert web.calls == [SEED]


def test_missing_url_is_usage_error(capsys):
    with pytest.raises(SystemExit) as info:
        cli.main([])
    assert info.value.code == 2


@pytest.mark.parametrize("argv", [
    ["--url", "not-a-url"],
    ["--url", "ftp://example.com/"],
    ["--url", SEED, "--depth", "-1"],
    ["--url", SEED, "--max-pages", "0"],
    ["--url", SEED, "--workers", "0"],
])
def test_bad_arguments_fail_without_crawling(web, tmp_path, capsys, argv):
    code = cli.main(argv + ["--output", str(tmp_path / "out")])
    assert code == 1
    assert "Fatal error" in capsys.readouterr().err
    assert web.calls == []


def test_unwritable_output_is_fatal(web, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    code = cli.main(["--url", SEED, "--output", str(blocker)])
    assert code == 1
    assert "Fatal error" in capsys.readouterr().err
    assert web.calls == []


def test_unexpected_error_is_reported_as_fatal(monkeypatch, tmp_path, capsys):
    class ExplodingController:
        def __init__(self, config):
            pass

        def run(self):
            raise RuntimeError("boom")

    monkeypatch.setattr(cli, "CrawlController", ExplodingController)
    code = cli.main(["--url", SEED, "--output", str(tmp_path)])

    assert code == 1
    assert "Fatal error: RuntimeError: boom" in capsys.readouterr().err
