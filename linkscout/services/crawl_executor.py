import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from linkscout.domain.check_options import CheckOptions
from linkscout.domain.crawl_context import CrawlContext
from linkscout.domain.crawl_report import CrawlReport
from linkscout.domain.crawl_task import CrawlTask
from linkscout.domain.http_response import HttpResponse
from linkscout.domain.link_result import LinkResult, LinkState
from linkscout.exceptions import HttpFetchError
from linkscout.services.crawl_observer import CrawlObserver
from linkscout.services.http_service import HttpService
from linkscout.services.link_extractor import LinkExtractor
from linkscout.services.url_classifier import UrlClassifier

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPE = re.compile(r"text/html|application/xhtml\+xml")

TRANSPORT_FAILURE_STATUS = 0


def is_html(content_type: Optional[str]) -> bool:
    return bool(content_type) and bool(_HTML_CONTENT_TYPE.search(content_type))


class CrawlExecutor:
    """Executes one crawl run given configured collaborators.

    Owns the traversal: a fixed pool of worker threads drains a FIFO of
    `CrawlTask`s, each of which may submit more. The run is over when no
    task is queued or in flight. Individual fetch failures become BROKEN
    results and never abort the run.
    """

    def __init__(
        self,
        *,
        http_service: HttpService,
        link_extractor: LinkExtractor,
        url_classifier: UrlClassifier,
        concurrency: int = 100,
        observers: Sequence[CrawlObserver] = (),
    ):
        self.http_service = http_service
        self.link_extractor = link_extractor
        self.url_classifier = url_classifier
        self.concurrency = int(concurrency)
        self.observers = list(observers)

        self._pool: Optional[ThreadPoolExecutor] = None
        self._idle = threading.Condition()
        self._outstanding = 0
        self._stop_event: Optional[threading.Event] = None

    def _is_stopped(self) -> bool:
        return self._stop_event is not None and self._stop_event.is_set()

    def run(self, root_url: str, options: CheckOptions, stop_event: Optional[threading.Event] = None) -> CrawlReport:
        """Crawl from `root_url` and block until the work queue drains."""
        context = CrawlContext(root_url, options)
        self._stop_event = stop_event
        self._outstanding = 0
        logger.info("Starting crawl of %s (concurrency=%s, recurse=%s)", root_url, self.concurrency, options.recurse)

        self._pool = ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="linkscout")
        try:
            # the root is always fetched with GET, whatever the scope rules say
            self._submit(CrawlTask(url=root_url, parent=None, should_recurse=True), context)
            with self._idle:
                while self._outstanding > 0:
                    self._idle.wait()
        finally:
            self._pool.shutdown(wait=True)
            self._pool = None

        report = CrawlReport.from_results(context.results)
        if self._is_stopped():
            logger.info("Crawl of %s cancelled after %d results (%d URLs dispatched)", root_url, len(report.results), len(context.visited))
        else:
            logger.info("Finished crawl of %s: %d results from %d URLs, passed=%s", root_url, len(report.results), len(context.visited), report.passed)
        return report

    def _submit(self, task: CrawlTask, context: CrawlContext) -> None:
        if self._is_stopped():
            logger.debug("Not dispatching %s; crawl cancelled", task.url)
            return
        with self._idle:
            self._outstanding += 1
        self._pool.submit(self._run_task, task, context)

    def _run_task(self, task: CrawlTask, context: CrawlContext) -> None:
        try:
            self.process(task, context)
        except Exception:
            logger.exception("Unexpected error while checking %s", task.url)
        finally:
            with self._idle:
                self._outstanding -= 1
                if self._outstanding == 0:
                    self._idle.notify_all()

    def process(self, task: CrawlTask, context: CrawlContext) -> Optional[LinkResult]:
        """Handle one task: dedup, skip, fetch, record and maybe expand."""
        if not context.mark_if_new(task.url):
            logger.debug("Skipping (visited) %s", task.url)
            return None

        if self.url_classifier.is_skipped(task.url):
            result = LinkResult.skipped(task.url, parent=task.parent)
            self._record(result, context)
            return result

        try:
            response = self.fetch(task)
        except Exception:
            # every URL past the dedup gate gets exactly one result
            logger.exception("Unexpected error while fetching %s", task.url)
            response = None
        status = response.status_code if response is not None else TRANSPORT_FAILURE_STATUS
        result = LinkResult.from_status(task.url, status, parent=task.parent)
        self._record(result, context)

        # error pages are expanded too, as long as they are HTML
        if task.should_recurse and response is not None and is_html(response.content_type):
            self.process_links(task, response.text, context)
        return result

    def fetch(self, task: CrawlTask) -> Optional[HttpResponse]:
        """GET pages we will expand, HEAD everything else.

        A 405 to HEAD is retried once with a body-less GET. Returns None on
        transport failure.
        """
        try:
            if task.should_recurse:
                return self.http_service.get(task.url)
            response = self.http_service.head(task.url)
            if response.status_code == 405:
                logger.debug("HEAD not allowed for %s; retrying with GET", task.url)
                response = self.http_service.get(task.url, read_body=False)
            return response
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", task.url, e)
            return None

    def process_links(self, task: CrawlTask, body: str, context: CrawlContext) -> int:
        """Extract links from a fetched page and queue them. Returns how many were queued."""
        for observer in self.observers:
            observer.on_page_start(task.url)

        queued = 0
        for link in self.link_extractor.extract_links(body, task.url):
            if not link.ok:
                continue
            child_recurse = self.url_classifier.should_recurse(link.url, context.root_url, context.options.recurse)
            self._submit(CrawlTask(url=link.url, parent=task.url, should_recurse=child_recurse), context)
            queued += 1
        logger.debug("Queued %d links from %s", queued, task.url)
        return queued

    def _record(self, result: LinkResult, context: CrawlContext) -> None:
        context.record(result)
        if result.state is LinkState.BROKEN:
            logger.warning("[%s] %s (from %s)", result.status, result.url, result.parent)
        else:
            logger.info("[%s] %s %s", result.status if result.status is not None else "-", result.state.value, result.url)
        for observer in self.observers:
            observer.on_link(result)
