"""
Configuration for the Kijiji taxonomy scraper
Load from the project .env file, then from environment variables
"""

import os
from typing import Any

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load .env from project root, fall back to the current directory
project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
env_path = os.path.join(project_root, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
else:
    load_dotenv()

FETCHER_CHOICES = ("http", "selenium")
LOCATION_SOURCE_CHOICES = ("payload", "dom")


def _get_float(key: str, default: str) -> float:
    raw = os.getenv(key, default)
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Expected a number, got {raw!r}", config_key=key, original_error=e
        ) from e
    if value <= 0:
        raise ConfigurationError(f"Expected a positive number, got {raw!r}", config_key=key)
    return value


def _get_choice(key: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(key, default).strip().lower()
    if value not in choices:
        raise ConfigurationError(
            f"Expected one of {', '.join(choices)}, got {value!r}", config_key=key
        )
    return value


def load_fetch_config() -> dict[str, Any]:
    """HTTP / headless browser settings"""
    return {
        "base_url": os.getenv("KIJIJI_BASE_URL", "https://www.kijiji.ca").rstrip("/"),
        "homepage_path": os.getenv("KIJIJI_HOMEPAGE_PATH", "/?siteLocale={locale}"),
        "timeout": _get_float("KIJIJI_FETCH_TIMEOUT", "30"),
        "user_agent": os.getenv(
            "KIJIJI_USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        ),
        "category_fetcher": _get_choice("KIJIJI_CATEGORY_FETCHER", "http", FETCHER_CHOICES),
        "location_fetcher": _get_choice("KIJIJI_LOCATION_FETCHER", "selenium", FETCHER_CHOICES),
        "selenium_wait": _get_float("KIJIJI_SELENIUM_WAIT", "2"),
    }


def load_payload_config() -> dict[str, Any]:
    """Where the taxonomy data sits inside the fetched homepage"""
    return {
        "category_anchor": os.getenv("KIJIJI_CATEGORY_ANCHOR", '"categories":['),
        "location_source": _get_choice("KIJIJI_LOCATION_SOURCE", "dom", LOCATION_SOURCE_CHOICES),
        "location_anchor": os.getenv("KIJIJI_LOCATION_ANCHOR", '"locationMenu":{'),
        "location_selector": os.getenv(
            "KIJIJI_LOCATION_SELECTOR",
            "div[class*=locationListContainer] > ul[class*=locationList]",
        ),
    }


def load_output_config() -> dict[str, Any]:
    return {"json_path": os.getenv("KIJIJI_OUTPUT_JSON") or None}


def load_logging_config() -> dict[str, Any]:
    level = os.getenv("KIJIJI_LOG_LEVEL", "INFO").strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"Unknown log level {level!r}", config_key="KIJIJI_LOG_LEVEL")
    return {
        "level": level,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    }


def get_config() -> dict[str, Any]:
    """Full config, re-read from the environment on every call"""
    return {
        "fetch": load_fetch_config(),
        "payload": load_payload_config(),
        "output": load_output_config(),
        "logging": load_logging_config(),
    }
