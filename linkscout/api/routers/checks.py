import logging
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from linkscout.api.auth import require_token
from linkscout.exceptions import InvalidCheckOptionsError, StaticServerError
from linkscout.services.check_options_parser import CheckOptionsParser
from linkscout.services.link_checker import LinkChecker
from linkscout.services.report_formatter import ReportFormatter

logger = logging.getLogger(__name__)


class CheckRequest(BaseModel):
    path: str
    concurrency: Optional[int] = None
    port: Optional[int] = None
    recurse: bool = False
    links_to_skip: List[str] = Field(default_factory=list)


def create_checks_router(
    link_checker_factory: Callable[[], LinkChecker],
    options_parser: CheckOptionsParser,
    report_formatter: ReportFormatter,
):
    router = APIRouter(prefix="/checks", tags=["Checks"])

    @router.post("", dependencies=[Depends(require_token)])
    def run_check(req: CheckRequest):
        """Run a check synchronously and return the full report."""
        try:
            options = options_parser.parse(
                path=req.path,
                concurrency=req.concurrency,
                port=req.port,
                recurse=req.recurse,
                links_to_skip=req.links_to_skip,
            )
        except InvalidCheckOptionsError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            report = link_checker_factory().check(options)
        except StaticServerError as e:
            logger.warning("Check of %s could not start: %s", req.path, e)
            raise HTTPException(status_code=400, detail=str(e))
        return report_formatter.to_dict(report)

    return router
