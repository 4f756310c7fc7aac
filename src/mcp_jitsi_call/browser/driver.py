"""WebDriver creation and teardown."""

from typing import Optional
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.remote.webdriver import WebDriver

import logging
logger = logging.getLogger(__name__)

from ..constants import DEFAULT_CHROME_ARGS
from ..context import get_context
from ..utils.retry import retry_op


def build_chrome_options(config: dict) -> ChromeOptions:
    """Chrome options for a call page browser."""
    options = ChromeOptions()
    for arg in DEFAULT_CHROME_ARGS:
        options.add_argument(arg)
    if config.get("headless"):
        options.add_argument("--headless=new")
    for arg in config.get("extra_args") or []:
        options.add_argument(arg)
    if config.get("chrome_path") and not config.get("remote_url"):
        options.binary_location = config["chrome_path"]
    return options


def create_webdriver(config: dict) -> WebDriver:
    """
    Create a Remote session when SELENIUM_REMOTE_URL is configured,
    otherwise a local Chrome.
    """
    options = build_chrome_options(config)
    remote_url = config.get("remote_url")
    if remote_url:
        logger.info(f"Creating remote WebDriver session at {remote_url}")
        return webdriver.Remote(command_executor=remote_url, options=options)
    logger.info("Starting local Chrome")
    return webdriver.Chrome(options=options)


def _ensure_driver() -> WebDriver:
    """Create the session driver if there is none yet."""
    ctx = get_context()

    if ctx.driver is not None:
        return ctx.driver

    if not ctx.config:
        # Raises EnvironmentError for invalid settings
        from ..config.environment import get_env_config
        ctx.config = get_env_config()

    ctx.driver = retry_op(lambda: create_webdriver(ctx.config))
    return ctx.driver


def close_driver() -> Optional[str]:
    """
    Quit the session driver. Returns the error message if quitting failed;
    the driver is dropped from the context either way.
    """
    ctx = get_context()
    driver, ctx.driver = ctx.driver, None
    ctx.call_page = None
    if driver is None:
        return None
    try:
        driver.quit()
    except Exception as e:
        logger.warning(f"Error quitting driver: {e}")
        return str(e)
    return None


__all__ = [
    "build_chrome_options",
    "create_webdriver",
    "_ensure_driver",
    "close_driver",
]
