"""HTTP Basic authentication for the alert endpoints.

Provides:
- verify_basic(): FastAPI dependency checking credentials against settings.basic

The health check is the only route mounted without this dependency.
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from logalert.core.config import Settings, get_settings

logger = logging.getLogger(__name__)
security = HTTPBasic(auto_error=False)


async def verify_basic(
    credentials: HTTPBasicCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Validate Basic credentials and return the username."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    # compare_digest on bytes so non-ASCII input does not raise
    user_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.basic.username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.basic.password.encode("utf-8")
    )
    if not (user_ok and password_ok):
        logger.warning("Rejected credentials for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
