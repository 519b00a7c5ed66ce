from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LinkState(str, Enum):
    OK = "OK"
    BROKEN = "BROKEN"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class LinkResult:
    """Outcome for one URL visited (or skipped) during a crawl."""

    url: str
    state: LinkState
    status: Optional[int] = None
    parent: Optional[str] = None

    @classmethod
    def from_status(cls, url: str, status: int, parent: Optional[str] = None) -> "LinkResult":
        """Map an HTTP status (0 for transport failure) onto OK/BROKEN."""
        state = LinkState.OK if 200 <= status < 300 else LinkState.BROKEN
        return cls(url=url, state=state, status=status, parent=parent)

    @classmethod
    def skipped(cls, url: str, parent: Optional[str] = None) -> "LinkResult":
        return cls(url=url, state=LinkState.SKIPPED, parent=parent)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "status": self.status,
            "state": self.state.value,
            "parent": self.parent,
        }
