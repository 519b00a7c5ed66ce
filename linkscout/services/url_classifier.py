import logging
import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

BUILTIN_SKIP_PATTERNS = ("^mailto:", "^irc:", "^data:")

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _host(url: str) -> Optional[Tuple[str, Optional[int]]]:
    """Host and effective port of `url`, or None when it does not parse."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not hostname:
        return None
    if port is None:
        port = _DEFAULT_PORTS.get(parts.scheme.lower())
    return hostname, port


class UrlClassifier:
    """Decides per-link whether it is skipped and whether it may be recursed into.

    Skip patterns are searched independently; any match is enough. The
    built-in `mailto:`/`irc:`/`data:` patterns are always active.
    """

    def __init__(self, links_to_skip: Iterable[str] = ()):
        patterns = [*links_to_skip, *BUILTIN_SKIP_PATTERNS]
        self.skip_patterns: List[re.Pattern] = [re.compile(p) for p in patterns]

    def is_skipped(self, url: str) -> bool:
        for pattern in self.skip_patterns:
            if pattern.search(url):
                logger.debug("Skipping (pattern %s) %s", pattern.pattern, url)
                return True
        return False

    def should_recurse(self, candidate_url: str, root_url: str, recurse_enabled: bool) -> bool:
        """True only when recursion is on, `candidate_url` starts with `root_url`
        and both share the same host.

        The host check guards against prefix collisions such as
        `http://example.com` vs `http://example.com.evil.org/`.
        """
        if not recurse_enabled:
            return False
        if not candidate_url.startswith(root_url):
            return False
        candidate_host = _host(candidate_url)
        if candidate_host is None:
            return False
        return candidate_host == _host(root_url)
