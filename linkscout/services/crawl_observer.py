from __future__ import annotations

import logging
from typing import Callable, Dict, List, Protocol

from linkscout.domain.link_result import LinkResult

logger = logging.getLogger(__name__)

LINK_EVENT = "link"
PAGE_START_EVENT = "pagestart"
EVENTS = (LINK_EVENT, PAGE_START_EVENT)


class CrawlObserver(Protocol):
    """Receives crawl events as they happen. Calls are synchronous, fire-and-forget."""

    def on_link(self, result: LinkResult) -> None: ...

    def on_page_start(self, url: str) -> None: ...


class CallbackObserver:
    """Adapts `on(event, callback)` style subscriptions to `CrawlObserver`."""

    def __init__(self):
        self._callbacks: Dict[str, List[Callable]] = {event: [] for event in EVENTS}

    def subscribe(self, event: str, callback: Callable) -> None:
        if event not in self._callbacks:
            raise ValueError(f"Unknown event {event!r}; expected one of {EVENTS}")
        self._callbacks[event].append(callback)

    def _emit(self, event: str, payload) -> None:
        for callback in list(self._callbacks[event]):
            try:
                callback(payload)
            except Exception:
                # a misbehaving subscriber must not kill the worker thread
                logger.exception("Subscriber for %r event failed", event)

    def on_link(self, result: LinkResult) -> None:
        self._emit(LINK_EVENT, result)

    def on_page_start(self, url: str) -> None:
        self._emit(PAGE_START_EVENT, url)
