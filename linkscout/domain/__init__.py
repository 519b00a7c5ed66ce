"""Domain objects for LinkScout - explicit re-exports to satisfy linters."""
from .link_result import LinkResult as LinkResult
from .link_result import LinkState as LinkState
from .crawl_task import CrawlTask as CrawlTask
from .parsed_link import ParsedLink as ParsedLink
from .check_options import CheckOptions as CheckOptions
from .crawl_report import CrawlReport as CrawlReport
from .http_response import HttpResponse as HttpResponse

__all__ = ["LinkResult", "LinkState", "CrawlTask", "ParsedLink", "CheckOptions", "CrawlReport", "HttpResponse"]
