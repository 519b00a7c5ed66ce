import logging
import secrets
from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from linkscout import config

logger = logging.getLogger(__name__)

# Bearer token auth for the check endpoint, which can read local directories.
# No LINKSCOUT_API_TOKEN means the endpoint is disabled (fail closed).
security = HTTPBearer(auto_error=False)


def require_token(creds: HTTPAuthorizationCredentials = Security(security)):
    token = creds.credentials if creds is not None else None
    expected = config.api_token()
    if not expected:
        logger.error("LINKSCOUT_API_TOKEN not set - check endpoint is disabled")
        raise HTTPException(status_code=503, detail="LINKSCOUT_API_TOKEN not configured")
    if not secrets.compare_digest(token or "", expected):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return True
