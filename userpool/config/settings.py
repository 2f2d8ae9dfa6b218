"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..core.cognito.pool import CognitoUserPool
from ..core.cognito.provider import DEFAULT_MAX_WORKERS, REQUEST_TIMEOUT, BotoIdentityProvider, IdentityProvider

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)
        else:
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("Loaded %s from environment (fallback)", env_var)
            return secret_value

    return None


def _require(var_name: str) -> str:
    value = os.environ.get(var_name)
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


@dataclass(frozen=True)
class PoolSettings:
    """User pool client configuration container."""
    pool_id: str
    client_id: str
    client_secret: Optional[str] = None
    endpoint_url: Optional[str] = None
    request_timeout: float = REQUEST_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def region(self) -> str:
        return self.pool_id.split("_", 1)[0]


def load_settings() -> PoolSettings:
    """Load pool settings from environment and /run/secrets."""
    return PoolSettings(
        pool_id=_require("COGNITO_USER_POOL_ID"),
        client_id=_require("COGNITO_CLIENT_ID"),
        client_secret=_load_secret_from_file("cognito_client_secret", "COGNITO_CLIENT_SECRET"),
        endpoint_url=os.environ.get("COGNITO_ENDPOINT_URL") or None,
        request_timeout=float(os.environ.get("COGNITO_REQUEST_TIMEOUT", REQUEST_TIMEOUT)),
        max_workers=int(os.environ.get("COGNITO_MAX_WORKERS", DEFAULT_MAX_WORKERS)),
    )


def build_pool(settings: Optional[PoolSettings] = None,
               provider: Optional[IdentityProvider] = None) -> CognitoUserPool:
    """Create a user pool wired to a boto3-backed provider (or the given one)."""
    settings = settings or load_settings()
    if provider is None:
        provider = BotoIdentityProvider(
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            timeout=settings.request_timeout,
            max_workers=settings.max_workers,
        )
    return CognitoUserPool(settings.pool_id, settings.client_id, provider, settings.client_secret)
