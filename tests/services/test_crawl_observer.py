import logging

import pytest

from linkscout.domain.link_result import LinkResult
from linkscout.services.crawl_observer import CallbackObserver


def test_callbacks_receive_events_in_subscription_order():
    seen = []
    observer = CallbackObserver()
    observer.subscribe("link", lambda r: seen.append(("first", r.url)))
    observer.subscribe("link", lambda r: seen.append(("second", r.url)))
    observer.subscribe("pagestart", lambda url: seen.append(("page", url)))

    observer.on_page_start("http://x/")
    observer.on_link(LinkResult.from_status("http://x/a", 200))

    assert seen == [("page", "http://x/"), ("first", "http://x/a"), ("second", "http://x/a")]


def test_unknown_event_rejected():
    with pytest.raises(ValueError):
        CallbackObserver().subscribe("done", print)


def test_failing_subscriber_is_logged_and_others_still_run(caplog):
    seen = []
    observer = CallbackObserver()

    def boom(_):
        raise RuntimeError("boom")

    observer.subscribe("pagestart", boom)
    observer.subscribe("pagestart", seen.append)
    caplog.set_level(logging.ERROR)

    observer.on_page_start("http://x/")

    assert seen == ["http://x/"]
    assert "pagestart" in caplog.text
