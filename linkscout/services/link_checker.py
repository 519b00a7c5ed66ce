import logging
import random
import threading
from typing import Callable, Optional

from linkscout.domain.check_options import CheckOptions
from linkscout.domain.crawl_report import CrawlReport
from linkscout.services.crawl_executor import CrawlExecutor
from linkscout.services.crawl_observer import CallbackObserver
from linkscout.services.http_service import HttpService
from linkscout.services.link_extractor import LinkExtractor, normalize_origin
from linkscout.services.static_site_server import StaticSiteServer
from linkscout.services.url_classifier import UrlClassifier

logger = logging.getLogger(__name__)


def pick_port() -> int:
    return 5000 + round(random.random() * 1000)


class LinkChecker:
    """Entry point for a check job.

    Subscribe with `on("link", fn)` / `on("pagestart", fn)` before calling
    `check()`; callbacks run synchronously on worker threads.
    """

    def __init__(
        self,
        http_service: HttpService,
        link_extractor: Optional[LinkExtractor] = None,
        server_factory: Callable[[str, int], StaticSiteServer] = StaticSiteServer,
        classifier_factory: Callable[..., UrlClassifier] = UrlClassifier,
    ):
        self.http_service = http_service
        self.link_extractor = link_extractor or LinkExtractor()
        self.server_factory = server_factory
        self.classifier_factory = classifier_factory
        self._events = CallbackObserver()

    def on(self, event: str, callback: Callable) -> "LinkChecker":
        self._events.subscribe(event, callback)
        return self

    def check(self, options: CheckOptions, stop_event: Optional[threading.Event] = None) -> CrawlReport:
        """Crawl `options.path` and return every visited link with its status.

        A local directory is first served over HTTP; failing to start that
        server raises `StaticServerError` before anything is crawled.
        """
        classifier = self.classifier_factory(options.links_to_skip)
        server = None
        root_url = normalize_origin(options.path)
        if not options.is_url:
            port = options.port if options.port is not None else pick_port()
            server = self.server_factory(options.path, port)
            server.start()
            root_url = server.url

        executor = CrawlExecutor(
            http_service=self.http_service,
            link_extractor=self.link_extractor,
            url_classifier=classifier,
            concurrency=options.concurrency,
            observers=[self._events],
        )
        try:
            return executor.run(root_url, options, stop_event=stop_event)
        finally:
            if server is not None:
                server.stop()


def check(options: CheckOptions, http_service: Optional[HttpService] = None) -> CrawlReport:
    """Convenience wrapper: build a `LinkChecker` from the container and run one check."""
    if http_service is None:
        from linkscout.container import Container

        http_service = Container().http_service()
    return LinkChecker(http_service).check(options)
