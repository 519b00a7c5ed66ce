"""
Tests for run.py main() with an injected container.
"""
import json
from unittest.mock import MagicMock, patch

from dependency_injector import providers

from run import EXIT_BROKEN, EXIT_ERROR, EXIT_PASSED, main
from linkscout.container import Container
from linkscout.domain.crawl_report import CrawlReport
from linkscout.domain.link_result import LinkResult


def _container(report):
    container = Container()
    container.config.USER_AGENT.from_value("TestBot/1.0")
    checker = MagicMock()
    checker.check.return_value = report
    container.link_checker.override(providers.Object(checker))
    return container, checker


def test_container_creates_services():
    container = Container()
    container.config.USER_AGENT.from_value("TestBot/1.0")
    container.config.HTTP_TIMEOUT.from_value(3)

    http_service = container.http_service()
    assert http_service.user_agent == "TestBot/1.0"
    assert http_service.timeout == 3
    assert container.link_checker() is not container.link_checker()
    assert container.link_checker().http_service is http_service


def test_check_passing_exit_code(capsys):
    container, checker = _container(CrawlReport.from_results([LinkResult.from_status("https://example.com", 200)]))

    code = main(["check", "https://example.com", "--recurse", "--skip", "^https://ignored"], container=container)

    assert code == EXIT_PASSED
    options = checker.check.call_args[0][0]
    assert options.recurse is True
    assert options.links_to_skip == ["^https://ignored"]
    assert "PASSED" in capsys.readouterr().out


def test_check_broken_exit_code_json(capsys):
    container, _ = _container(CrawlReport.from_results([
        LinkResult.from_status("https://example.com", 200),
        LinkResult.from_status("https://example.com/x", 404, parent="https://example.com"),
    ]))

    code = main(["check", "https://example.com", "--format", "json"], container=container)

    assert code == EXIT_BROKEN
    data = json.loads(capsys.readouterr().out)
    assert data["passed"] is False
    assert data["total"] == 2


def test_check_reads_config_file(tmp_path):
    cfg = tmp_path / "linkscout.yml"
    cfg.write_text("path: https://example.com\nconcurrency: 3\nskip: ^https://x\n", encoding="utf-8")
    container, checker = _container(CrawlReport.from_results([]))

    main(["check", "--config", str(cfg), "--concurrency", "9"], container=container)

    options = checker.check.call_args[0][0]
    assert options.path == "https://example.com"
    assert options.concurrency == 9
    assert options.links_to_skip == ["^https://x"]


def test_missing_config_file_is_usage_error(tmp_path, capsys):
    container, checker = _container(CrawlReport.from_results([]))

    code = main(["check", "--config", str(tmp_path / "nope.yml")], container=container)

    assert code == EXIT_ERROR
    assert "nope.yml" in capsys.readouterr().err
    checker.check.assert_not_called()


def test_missing_path_is_usage_error(capsys):
    container, _ = _container(CrawlReport.from_results([]))
    assert main(["check"], container=container) == EXIT_ERROR


def test_serve_runs_uvicorn():
    container, _ = _container(CrawlReport.from_results([]))
    with patch('run.uvicorn.run') as mock_uvicorn:
        assert main(["serve", "--port", "9001"], container=container) == EXIT_PASSED
    mock_uvicorn.assert_called_once()
    assert mock_uvicorn.call_args.kwargs["port"] == 9001
