"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional
from selenium.webdriver.remote.webdriver import WebDriver
import selenium

from ..context import get_context


def collect_diagnostics(
    driver: Optional[WebDriver] = None,
    exc: Optional[Exception] = None,
    config: Optional[dict] = None
) -> str:
    """
    Collect diagnostic information about the browser, driver, and environment.

    Args:
        driver: Selenium WebDriver instance (if None, will try to get from context)
        exc: Exception that occurred (can be None)
        config: Configuration dictionary (if None, will get from context)

    Returns:
        str: Formatted diagnostic information
    """
    ctx = get_context()

    if driver is None:
        driver = ctx.driver

    if config is None:
        config = ctx.config

    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
        f"Selenium          : {getattr(selenium, '__version__', '?')}",
        f"Remote URL        : {config.get('remote_url') or '<local>'}",
        f"Chrome binary     : {config.get('chrome_path') or '<default>'}",
        f"Headless          : {bool(config.get('headless'))}",
        f"Driver initialized: {driver is not None}",
        f"Call page ready   : {ctx.is_call_page_ready()}",
        f"Pending messages  : {sum(1 for t in ctx.pending_messages if not t.done())}",
    ]

    if driver:
        cap = getattr(driver, "capabilities", None) or {}
        parts.append(f"Browser           : {cap.get('browserName', '<unknown>')} {cap.get('browserVersion', '')}".rstrip())
        chrome_cap = cap.get("chrome") or {}
        parts.append(f"Driver version    : {chrome_cap.get('chromedriverVersion') or '<unknown>'}")
        try:
            parts.append(f"Current URL       : {driver.current_url}")
        except Exception:
            parts.append("Current URL       : <unknown>")

    if exc:
        parts += [
            "---- ERROR ----",
            f"Error type        : {type(exc).__name__}",
            f"Error message     : {exc}",
        ]

    return "\n".join(parts)


__all__ = ['collect_diagnostics']
