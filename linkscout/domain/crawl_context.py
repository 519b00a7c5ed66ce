import threading
from typing import List, Optional

from linkscout.domain.check_options import CheckOptions
from linkscout.domain.link_result import LinkResult
from linkscout.domain.visited_tracker import VisitedTracker


class CrawlContext:
    """State owned by one crawl run and shared across its workers."""

    def __init__(self, root_url: str, options: CheckOptions, visited_tracker: Optional[VisitedTracker] = None):
        self.root_url = root_url
        self.options = options
        self.visited = visited_tracker or VisitedTracker()
        self._results: List[LinkResult] = []
        self._results_lock = threading.Lock()

    def mark_if_new(self, url: str) -> bool:
        return self.visited.mark_if_new(url)

    def record(self, result: LinkResult) -> None:
        with self._results_lock:
            self._results.append(result)

    @property
    def results(self) -> List[LinkResult]:
        """Snapshot of the results recorded so far, in completion order."""
        with self._results_lock:
            return list(self._results)
