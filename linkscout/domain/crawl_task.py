from typing import NamedTuple, Optional


class CrawlTask(NamedTuple):
    """A unit of work for the crawl executor."""
    url: str
    parent: Optional[str] = None
    should_recurse: bool = False
