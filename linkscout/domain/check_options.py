from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from linkscout.exceptions import InvalidCheckOptionsError

DEFAULT_CONCURRENCY = 100


@dataclass(frozen=True)
class CheckOptions:
    """Options for a single check run. Read-only for the duration of a crawl."""

    path: str
    concurrency: int = DEFAULT_CONCURRENCY
    port: Optional[int] = None
    recurse: bool = False
    links_to_skip: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.path, str) or self.path.strip() == "":
            raise InvalidCheckOptionsError("path is required")
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise InvalidCheckOptionsError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if self.port is not None and (isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 <= self.port <= 65535):
            raise InvalidCheckOptionsError(f"port must be an integer in 0..65535, got {self.port!r}")
        skips = list(self.links_to_skip or [])
        for pattern in skips:
            if not isinstance(pattern, str):
                raise InvalidCheckOptionsError(f"skip patterns must be strings, got {pattern!r}")
            try:
                re.compile(pattern)
            except re.error as e:
                raise InvalidCheckOptionsError(f"invalid skip pattern {pattern!r}: {e}") from e
        object.__setattr__(self, "links_to_skip", skips)
        object.__setattr__(self, "recurse", bool(self.recurse))

    @property
    def is_url(self) -> bool:
        """True when `path` already names a remote target rather than a local directory."""
        return self.path.startswith("http")
