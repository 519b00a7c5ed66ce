from __future__ import annotations

import logging
import os
import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from linkscout.exceptions import StaticServerError

logger = logging.getLogger(__name__)


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.debug("static %s - %s", self.address_string(), format % args)


class StaticSiteServer:
    """Serve a local directory over plain HTTP for the duration of a check.

    `port=0` binds an ephemeral port; `port` reports the bound one after
    `start()`.
    """

    def __init__(self, root: str, port: int, host: str = "127.0.0.1"):
        self.root = root
        self.host = host
        self._requested_port = port
        self._server: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        if self._server is None:
            return self._requested_port
        return self._server.server_address[1]

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def start(self) -> "StaticSiteServer":
        if self._server is not None:
            return self
        if not os.path.isdir(self.root):
            raise StaticServerError(self.root, self._requested_port, "not a directory")
        handler = partial(_QuietHandler, directory=os.path.abspath(self.root))
        try:
            server = ThreadingHTTPServer((self.host, self._requested_port), handler)
        except OSError as e:
            raise StaticServerError(self.root, self._requested_port, str(e)) from e
        server.daemon_threads = True
        self._server = server
        self._thread = threading.Thread(target=server.serve_forever, name="linkscout-static", daemon=True)
        self._thread.start()
        logger.info("Serving %s at %s", self.root, self.url)
        return self

    def stop(self) -> None:
        """Shut the server down and wait for the serving thread to exit."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        logger.info("Stopped static server for %s", self.root)
        self._server = None
        self._thread = None

    def __enter__(self) -> "StaticSiteServer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
