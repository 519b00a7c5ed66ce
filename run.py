import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from linkscout import config as env
from linkscout.api.server import create_app
from linkscout.container import Container
from linkscout.domain.link_result import LinkState
from linkscout.exceptions import ConfigNotFoundError, InvalidCheckOptionsError, StaticServerError

logger = logging.getLogger("linkscout")

EXIT_PASSED = 0
EXIT_BROKEN = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkscout",
        description="Crawl a site or local directory and report broken links.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    chk = sub.add_parser("check", help="Check links under a URL or local directory")
    chk.add_argument("path", nargs="?", help="URL or local directory to check")
    chk.add_argument("--config", help="YAML file with check options (flags override it)")
    chk.add_argument("--concurrency", type=int, help="Number of concurrent requests")
    chk.add_argument("--port", type=int, help="Port for serving a local directory")
    chk.add_argument("--recurse", action="store_true", default=None, help="Follow same-origin links recursively")
    chk.add_argument("--skip", action="append", dest="links_to_skip", metavar="REGEX", help="Skip links matching REGEX (repeatable)")
    chk.add_argument("--format", choices=("text", "json"), default="text", help="Report format (default: text)")
    chk.add_argument("--verbose", action="store_true", help="List every link and log at DEBUG level")

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default="0.0.0.0")
    srv.add_argument("--port", type=int, default=8000)
    return parser


def run_check(args, container: Container) -> int:
    data = None
    if args.config:
        data = container.check_config_store().load_yaml_dict(args.config)
        if data is None:
            raise ConfigNotFoundError(args.config, "not found or not a YAML mapping")

    options = container.check_options_parser().parse(
        data,
        path=args.path,
        concurrency=args.concurrency,
        port=args.port,
        recurse=args.recurse,
        links_to_skip=args.links_to_skip,
    )

    checker = container.link_checker()
    if args.format == "text" and args.verbose:
        checker.on("pagestart", lambda url: sys.stderr.write(f"Scanning {url}\n"))
    report = checker.check(options)

    formatter = container.report_formatter()
    if args.format == "json":
        sys.stdout.write(json.dumps(formatter.to_dict(report), indent=2) + "\n")
    else:
        sys.stdout.write(formatter.render_text(report, show_all=args.verbose) + "\n")

    broken = len(report.by_state(LinkState.BROKEN))
    logger.info("Check of %s done: %d results, %d broken", options.path, len(report.results), broken)
    return EXIT_PASSED if report.passed else EXIT_BROKEN


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    level = "DEBUG" if getattr(args, "verbose", False) else env.log_level()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    container = container or Container()

    if args.command == "serve":
        uvicorn.run(create_app(container), host=args.host, port=args.port)
        return EXIT_PASSED

    try:
        return run_check(args, container)
    except (ConfigNotFoundError, InvalidCheckOptionsError, StaticServerError) as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
