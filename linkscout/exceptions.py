"""Custom exceptions for LinkScout services."""


class ConfigNotFoundError(Exception):
    """Raised when a requested option file cannot be found or parsed."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}' {reason}")


class InvalidCheckOptionsError(ValueError):
    """Raised when check options are malformed (bad types, bad regex, ...)."""


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class StaticServerError(Exception):
    """Raised when the local static site server cannot be started."""

    def __init__(self, root: str, port: int, reason: str):
        self.root = root
        self.port = port
        self.reason = reason
        super().__init__(f"Could not serve '{root}' on port {port}: {reason}")
