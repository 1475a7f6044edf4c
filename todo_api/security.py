"""
Todo API - Security Validation

Startup checks for the security-relevant parts of the configuration.
"""

import logging
import warnings

from todo_api.config import Settings

logger = logging.getLogger(__name__)

MIN_SECRET_KEY_LENGTH = 32


class SecurityConfigError(RuntimeError):
    """Raised when the configuration is unsafe to start with."""


def validate_security_config(settings: Settings) -> None:
    """
    Validate security configuration on startup.

    A missing signing key is fatal: there is no built-in fallback secret.
    Weak but usable settings only issue warnings.
    """
    if not settings.JWT_SECRET_KEY:
        logger.error("JWT_SECRET_KEY is not configured; refusing to start")
        raise SecurityConfigError(
            "JWT_SECRET_KEY must be set. Refusing to start without a signing key."
        )

    if len(settings.JWT_SECRET_KEY) < MIN_SECRET_KEY_LENGTH:
        warnings.warn(
            "SECURITY WARNING: JWT_SECRET_KEY is shorter than "
            f"{MIN_SECRET_KEY_LENGTH} characters. Use a longer secret.",
            UserWarning,
        )

    # CORS validation
    if "*" in settings.CORS_ORIGINS:
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected. "
            "Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )
