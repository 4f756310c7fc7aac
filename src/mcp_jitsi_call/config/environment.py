"""Environment configuration and validation."""

import os
from typing import List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(filename=".env", usecwd=True), override=True)

import logging
logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "0") -> bool:
    raw = (os.getenv(name) or default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise EnvironmentError(f"{name} must be a boolean flag (0/1), got {raw!r}.")


def get_env_config() -> dict:
    """
    Read environment variables and validate them.

    Optional:   SELENIUM_REMOTE_URL (use a remote WebDriver server instead of a local Chrome)
                CHROME_EXECUTABLE_PATH (local sessions only)
                CALL_PAGE_HEADLESS (default 0)
                CALL_PAGE_EXTRA_CHROME_ARGS (space separated)

    Raises EnvironmentError when a value is present but unusable.
    """
    remote_url = (os.getenv("SELENIUM_REMOTE_URL") or "").strip() or None
    if remote_url:
        parsed = urlparse(remote_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise EnvironmentError(f"SELENIUM_REMOTE_URL must be an http(s) URL, got {remote_url!r}.")

    chrome_path = (os.getenv("CHROME_EXECUTABLE_PATH") or "").strip() or None
    if chrome_path and remote_url:
        logger.debug("CHROME_EXECUTABLE_PATH is ignored for remote sessions")

    extra_args: List[str] = (os.getenv("CALL_PAGE_EXTRA_CHROME_ARGS") or "").split()

    return {
        "remote_url": remote_url,
        "chrome_path": chrome_path,
        "headless": _env_flag("CALL_PAGE_HEADLESS"),
        "extra_args": extra_args,
    }


def describe_target(config: Optional[dict] = None) -> str:
    """Human readable description of where the browser runs."""
    if config is None:
        config = get_env_config()
    if config.get("remote_url"):
        return f"remote:{config['remote_url']}"
    return f"local:{config.get('chrome_path') or 'chrome'}"
