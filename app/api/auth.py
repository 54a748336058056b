"""Shared-secret access gate for automation endpoints"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from app.config import Settings, get_settings

logger = structlog.get_logger()

# Bearer scheme that lets the gate decide how to answer a missing header
bearer_scheme = HTTPBearer(auto_error=False)


def verify_bearer_token(expected: str, credentials: Optional[HTTPAuthorizationCredentials]) -> bool:
    """Check a presented bearer token against a configured secret"""
    if not expected:
        return True
    if credentials is None or credentials.scheme.lower() != "bearer":
        return False
    return secrets.compare_digest(credentials.credentials.encode(), expected.encode())


def require_shared_secret(setting_name: str):
    """
    Dependency factory protecting a route with the secret stored in the given
    setting. When the setting is empty every request is let through.
    """
    async def secret_checker(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        settings: Settings = Depends(get_settings),
    ) -> None:
        expected = getattr(settings, setting_name)
        if verify_bearer_token(expected, credentials):
            return

        logger.warning("Rejected request with invalid bearer token", setting=setting_name)
        detail = (
            "Missing header Authorization: Bearer <API_KEY>"
            if credentials is None
            else "Invalid API key"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return secret_checker


require_automation_key = require_shared_secret("make_api_key")
require_bapi_webhook_secret = require_shared_secret("bapi_webhook_secret")
