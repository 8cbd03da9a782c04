"""
Configuration module for Feedback Hub.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root (parent of feedback_hub/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Log level name used by setup_logging() when DEBUG is off
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# =============================================================================
# Record Backend Configuration
# =============================================================================

# Base URL of the record-storage REST API
RECORD_API_URL: str = os.getenv("RECORD_API_URL", "https://api.apper.io/v1")

# API key for the record backend
# Required for production; empty string means "use the in-memory client"
RECORD_API_KEY: str = os.getenv("RECORD_API_KEY", "")

# Project identifier on the record backend
RECORD_PROJECT_ID: str = os.getenv("RECORD_PROJECT_ID", "")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

# Maximum concurrent post lookups when joining roadmap items to posts
ROADMAP_JOIN_WORKERS: int = int(os.getenv("ROADMAP_JOIN_WORKERS", "8"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not RECORD_API_KEY:
            errors.append("RECORD_API_KEY is required in production")
        if not RECORD_PROJECT_ID:
            errors.append("RECORD_PROJECT_ID is required in production")

    if not RECORD_API_URL.startswith(("http://", "https://")):
        errors.append(f"RECORD_API_URL must start with http:// or https://, got {RECORD_API_URL}")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if ROADMAP_JOIN_WORKERS < 1:
        errors.append("ROADMAP_JOIN_WORKERS must be at least 1")

    if logging.getLevelName(LOG_LEVEL) == f"Level {LOG_LEVEL}":
        errors.append(f"LOG_LEVEL is not a valid logging level: {LOG_LEVEL}")

    return errors


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for command-line use.

    Args:
        level: Level name override. Defaults to DEBUG when DEBUG is set,
            otherwise LOG_LEVEL.
    """
    if level is None:
        level = "DEBUG" if DEBUG else LOG_LEVEL

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  RECORD_API_URL: {RECORD_API_URL}")
    print(f"  RECORD_API_KEY: {'***' if RECORD_API_KEY else '(not set)'}")
    print(f"  RECORD_PROJECT_ID: {RECORD_PROJECT_ID or '(not set)'}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  ROADMAP_JOIN_WORKERS: {ROADMAP_JOIN_WORKERS}")
