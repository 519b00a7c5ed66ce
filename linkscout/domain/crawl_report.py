"""Crawl report data model."""
from typing import List, NamedTuple

from linkscout.domain.link_result import LinkResult, LinkState


class CrawlReport(NamedTuple):
    """Result of a check run.

    Broken links are data, not exceptions: a crawl that found broken links
    still produces a report, with `passed` set to False.
    """
    results: List[LinkResult]
    """Every visited or skipped URL, in completion order"""

    passed: bool
    """True when no result is BROKEN"""

    @classmethod
    def from_results(cls, results: List[LinkResult]) -> "CrawlReport":
        results = list(results)
        passed = not any(r.state is LinkState.BROKEN for r in results)
        return cls(results=results, passed=passed)

    def by_state(self, state: LinkState) -> List[LinkResult]:
        return [r for r in self.results if r.state is state]
