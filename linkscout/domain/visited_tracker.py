import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been dispatched during a crawl.

    Shared by every worker of one run. `mark_if_new` is a single
    lock-guarded test-and-insert, so two workers racing on the same URL
    can never both be told it is new.

    The set is unbounded for the lifetime of the run: evicting entries
    would let a URL be dispatched twice.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    def mark_if_new(self, url: str) -> bool:
        """Record `url`; return True only for the first caller."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
