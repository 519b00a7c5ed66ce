from fastapi import APIRouter

from linkscout import config


def create_systems_router(settings: dict):
    """Liveness plus the defaults a new check will run with."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        # checks are refused with 503 until a token is configured
        return {"status": "ok", "checks_enabled": config.api_token() is not None}

    @router.get("/config")
    def get_config():
        """Effective check defaults. The API token is never echoed."""
        return {
            "user_agent": settings["USER_AGENT"],
            "http_timeout": settings["HTTP_TIMEOUT"],
            "default_concurrency": settings["LINKSCOUT_CONCURRENCY"],
            "log_level": settings["LINKSCOUT_LOG_LEVEL"],
        }

    return router
