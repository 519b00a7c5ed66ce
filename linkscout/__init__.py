"""LinkScout: crawl a site or local directory and report broken links."""
from linkscout.domain import CheckOptions, CrawlReport, LinkResult, LinkState
from linkscout.services.link_checker import LinkChecker, check

__all__ = ["CheckOptions", "CrawlReport", "LinkResult", "LinkState", "LinkChecker", "check"]
