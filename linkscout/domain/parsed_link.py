from typing import NamedTuple, Optional


class ParsedLink(NamedTuple):
    """A raw attribute token and the result of resolving it against a base URL.

    Exactly one of `url` / `error` is set.
    """
    raw: str
    url: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.url is not None
