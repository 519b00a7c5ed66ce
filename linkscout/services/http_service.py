import requests
import urllib3
from typing import Callable

from linkscout.domain.http_response import HttpResponse
from linkscout.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper used by the crawl executor.

    Requires http_client callable with the `requests.request` signature for
    dependency injection, so tests can stub network I/O without patching.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, method: str = "GET", read_body: bool = True) -> HttpResponse:
        """Request `url` and return status code, body text and Content-Type.

        With `read_body=False` (or for HEAD) the body is never downloaded and
        `text` is empty. Redirects are followed; the final status is reported.
        """
        headers = {"User-Agent": self.user_agent}
        stream = method == "HEAD" or not read_body
        try:
            resp = self.http_client(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=True,
                stream=stream,
            )
        except (requests.exceptions.RequestException, urllib3.exceptions.LocationValueError) as e:
            # LocationValueError: urllib3 rejects the host (e.g. a label over 63 chars)
            raise HttpFetchError(url, e) from e

        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        if stream:
            close = getattr(resp, "close", None)
            if close is not None:
                close()
            return HttpResponse(resp.status_code, "", ct)

        try:
            text = resp.text
        except requests.exceptions.RequestException as e:
            # body download can still fail after the headers arrived
            raise HttpFetchError(url, e) from e
        return HttpResponse(resp.status_code, text, ct)

    def head(self, url: str) -> HttpResponse:
        return self.fetch(url, method="HEAD", read_body=False)

    def get(self, url: str, read_body: bool = True) -> HttpResponse:
        return self.fetch(url, method="GET", read_body=read_body)
