from typing import Optional

from fastapi import FastAPI

from linkscout.api.routers import create_checks_router, create_systems_router
from linkscout.container import ENV, Container


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the FastAPI app with control endpoints wired from `container`."""
    container = container or Container()
    app = FastAPI(title="LinkScout")
    app.include_router(create_systems_router(ENV))
    app.include_router(
        create_checks_router(
            link_checker_factory=container.link_checker,
            options_parser=container.check_options_parser(),
            report_formatter=container.report_formatter(),
        )
    )
    app.state.container = container
    return app
