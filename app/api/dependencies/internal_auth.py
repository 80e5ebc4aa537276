# app/api/dependencies/internal_auth.py
import logging
import secrets
from http import HTTPStatus
from typing import Optional

from fastapi import Header, HTTPException

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Environments where internal endpoints may run without a configured key.
OPEN_ENVIRONMENTS = ("local", "test")


def _key_matches(provided: Optional[str], expected: str) -> bool:
    if not provided:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def verify_internal_api_key(
    internal_api_key: Optional[str] = Header(
        default=None,
        alias="X-Internal-Api-Key",
        description="Internal API key required for /internal endpoints in non-local environments.",
    ),
) -> None:
    """
    Dependency guarding the /internal aggregation endpoints.

    Rules
    -----
    - APP_ENV local/test without INTERNAL_API_KEY -> open.
    - INTERNAL_API_KEY configured (any env)       -> header must match, else 401.
    - Other envs without INTERNAL_API_KEY          -> 500 (misconfiguration).
    """
    settings = get_settings()
    env = (settings.APP_ENV or "local").lower()
    expected = getattr(settings, "INTERNAL_API_KEY", None)

    if not expected:
        if env in OPEN_ENVIRONMENTS:
            return
        logger.error("INTERNAL_API_KEY is not configured for APP_ENV=%s", env)
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail="INTERNAL_API_KEY not configured for this environment.",
        )

    if not _key_matches(internal_api_key, expected):
        logger.warning("Rejected internal request with invalid or missing API key")
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Invalid or missing internal API key.",
        )
