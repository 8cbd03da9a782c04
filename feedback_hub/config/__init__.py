"""
Configuration module.

Handles environment variables, backend credentials, and logging setup.
"""

from feedback_hub.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    RECORD_API_URL,
    RECORD_API_KEY,
    RECORD_PROJECT_ID,
    REQUEST_TIMEOUT,
    ROADMAP_JOIN_WORKERS,
    is_production,
    is_development,
    validate_config,
    setup_logging,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "RECORD_API_URL",
    "RECORD_API_KEY",
    "RECORD_PROJECT_ID",
    "REQUEST_TIMEOUT",
    "ROADMAP_JOIN_WORKERS",
    "is_production",
    "is_development",
    "validate_config",
    "setup_logging",
    "print_config_summary",
]
