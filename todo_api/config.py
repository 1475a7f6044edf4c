"""
Todo API - Configuration Module

Application configuration is an explicit, immutable object. It is built once
(usually from environment variables) and handed to ``create_app``.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


def _default_cors_origins() -> list[str]:
    return ["http://localhost:5173", "http://localhost:3000"]


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    # Application
    APP_NAME: str = "Todo API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # SQLite file backing users and todos
    DATABASE_URL: str = "sqlite+aiosqlite:///./todo.db"

    # CORS - Allowed origins for client requests
    CORS_ORIGINS: list[str] = field(default_factory=_default_cors_origins)

    # Logging
    LOG_LEVEL: str = "INFO"

    # JWT Configuration
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from environment variables (or the given mapping)."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            APP_NAME=env.get("APP_NAME", defaults.APP_NAME),
            APP_VERSION=env.get("APP_VERSION", defaults.APP_VERSION),
            DEBUG=env.get("DEBUG", "false").lower() == "true",
            HOST=env.get("HOST", defaults.HOST),
            PORT=int(env.get("PORT", str(defaults.PORT))),
            DATABASE_URL=env.get("DATABASE_URL", defaults.DATABASE_URL),
            CORS_ORIGINS=_split_origins(
                env.get("CORS_ORIGINS", ",".join(defaults.CORS_ORIGINS))
            ),
            LOG_LEVEL=env.get("LOG_LEVEL", defaults.LOG_LEVEL),
            JWT_SECRET_KEY=env.get("JWT_SECRET_KEY") or None,
            JWT_ALGORITHM=env.get("JWT_ALGORITHM", defaults.JWT_ALGORITHM),
            JWT_ACCESS_TOKEN_EXPIRE_MINUTES=int(
                env.get(
                    "JWT_ACCESS_TOKEN_EXPIRE_MINUTES",
                    str(defaults.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
                )
            ),
        )
