"""Base page object."""

import time
from typing import Any

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from .results import ScriptResult

import logging
logger = logging.getLogger(__name__)


class AbstractPageObject:
    """
    Holds the driver a page object works against. The driver is borrowed:
    page objects never quit it.
    """

    def __init__(self, driver: WebDriver):
        self.driver = driver

    def visit(self, url: str) -> bool:
        logger.info(f"Visiting url {url}")
        started = time.monotonic()
        try:
            self.driver.get(url)
        except WebDriverException as e:
            logger.error(f"Failed to load {url}: {e}")
            return False
        logger.info(f"Waited {time.monotonic() - started:.2f}s for driver to load page")
        return True

    def run_script(self, script: str, shape, *args: Any) -> ScriptResult:
        """Execute a script and decode its return value against `shape`."""
        return ScriptResult.decode(self.driver.execute_script(script, *args), shape)
