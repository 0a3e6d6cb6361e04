"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts locally without any configuration; in a production
deployment override at least ``SECRET_KEY`` and the notification
settings.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to console output.
    log_file: str = os.getenv("LOG_FILE", "")

    # Session tokens are HS256 signed with this key.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    session_expire_minutes: int = int(os.getenv("SESSION_EXPIRE_MINUTES", str(60 * 24 * 365)))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "app_session_id")

    # The user whose openId matches this value is always stored as an
    # administrator when upserted.
    owner_open_id: str = os.getenv("OWNER_OPEN_ID", "")

    # Owner notification channel.  Both values must be set for
    # ``NotificationService.notify_owner`` to deliver anything.
    notification_api_url: str = os.getenv("NOTIFICATION_API_URL", "")
    notification_api_key: str = os.getenv("NOTIFICATION_API_KEY", "")
    notification_timeout_seconds: float = float(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "10"))

    # Path of the SQLite database file.  A relative path is resolved
    # relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "service_booking.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
