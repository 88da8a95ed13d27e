import hmac
import logging
import os

from fastapi import Header, HTTPException, status

logger = logging.getLogger("facilities.security")


def _is_dev_env() -> bool:
    return os.getenv("ENV", "dev").lower() in {"dev", "development", "local"}


def require_facilities_api_key(
    x_api_key: str | None = Header(default=None, alias="X-Api-Key"),
) -> None:
    configured_key = os.getenv("FACILITIES_API_KEY", "")

    if not configured_key:
        if _is_dev_env():
            logger.warning(
                "FACILITIES_API_KEY is not set in dev; allowing request without key."
            )
            return
        logger.error("API key verification failed: FACILITIES_API_KEY is missing.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "AUTH_NOT_CONFIGURED",
                "human_message": "API key is not configured.",
            },
        )

    if not x_api_key or not hmac.compare_digest(x_api_key, configured_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "INVALID_API_KEY",
                "human_message": "Invalid or missing API key.",
            },
        )
