"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from linkscout import config as env
from linkscout.services.check_config_store import CheckConfigStore
from linkscout.services.check_options_parser import CheckOptionsParser
from linkscout.services.http_service import HttpService
from linkscout.services.link_checker import LinkChecker
from linkscout.services.link_extractor import LinkExtractor
from linkscout.services.report_formatter import ReportFormatter
from linkscout.services.static_site_server import StaticSiteServer


# Environment variables used by the container (read via `linkscout.config` helpers).
#
# USER_AGENT (str, default: "LinkScout/0.1")
#   User-Agent header for every outbound HEAD/GET.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Per-request timeout. A request that times out is reported as BROKEN with status 0.
#
# LINKSCOUT_CONCURRENCY (int, default: 100)
#   Worker threads per check when the caller does not set `concurrency`.
#
# LINKSCOUT_API_TOKEN (str | optional)
#   Bearer token for POST /checks. Unset disables the endpoint.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "LINKSCOUT_CONCURRENCY": env.CONCURRENCY,
    "LINKSCOUT_LOG_LEVEL": env.log_level(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for LinkScout."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.request),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    # one checker per run: subscriptions are per checker
    link_checker = providers.Factory(
        LinkChecker,
        http_service=http_service,
        link_extractor=link_extractor,
        server_factory=providers.Object(StaticSiteServer),
    )

    check_config_store = providers.Singleton(
        CheckConfigStore
    )

    check_options_parser = providers.Singleton(
        CheckOptionsParser,
        default_concurrency=config.LINKSCOUT_CONCURRENCY.as_(int),
    )

    report_formatter = providers.Singleton(
        ReportFormatter
    )
