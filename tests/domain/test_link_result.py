import pytest

from linkscout.domain.crawl_report import CrawlReport
from linkscout.domain.link_result import LinkResult, LinkState


@pytest.mark.parametrize("status", [200, 204, 299])
def test_2xx_is_ok(status):
    assert LinkResult.from_status("http://x/", status).state is LinkState.OK


@pytest.mark.parametrize("status", [0, 199, 301, 404, 405, 500])
def test_anything_else_is_broken(status):
    assert LinkResult.from_status("http://x/", status).state is LinkState.BROKEN


def test_skipped_has_no_status():
    r = LinkResult.skipped("mailto:a@b.c", parent="http://x/")
    assert r.state is LinkState.SKIPPED
    assert r.status is None
    assert r.parent == "http://x/"


def test_to_dict_uses_plain_values():
    r = LinkResult.from_status("http://x/a", 404, parent="http://x/")
    assert r.to_dict() == {"url": "http://x/a", "status": 404, "state": "BROKEN", "parent": "http://x/"}


def test_report_passes_without_broken_results():
    report = CrawlReport.from_results([
        LinkResult.from_status("http://x/", 200),
        LinkResult.skipped("mailto:a@b.c", parent="http://x/"),
    ])
    assert report.passed


def test_report_fails_with_any_broken_result():
    report = CrawlReport.from_results([
        LinkResult.from_status("http://x/", 200),
        LinkResult.from_status("http://x/missing", 404, parent="http://x/"),
    ])
    assert not report.passed
    assert [r.url for r in report.by_state(LinkState.BROKEN)] == ["http://x/missing"]


def test_empty_report_passes():
    assert CrawlReport.from_results([]).passed
