"""Session lifecycle tool implementations."""

import json
from ..context import get_context, reset_context
from ..browser.driver import _ensure_driver, close_driver
from ..config import describe_target
from ..pageobjects import CallPage
from ..utils.diagnostics import collect_diagnostics

import logging
logger = logging.getLogger(__name__)


async def start_session() -> str:
    """
    Create the browser session (if needed) and bind a call page to it.

    Returns:
        JSON string with session info
    """
    ctx = get_context()

    try:
        driver = _ensure_driver()
    except Exception as e:
        logger.error(f"Could not create the browser session: {e}")
        return json.dumps({
            "ok": False,
            "error": "driver_not_initialized",
            "driver_initialized": False,
            "diagnostics": {"summary": collect_diagnostics(None, e, ctx.config)},
            "message": "Failed to create a WebDriver session.",
        })

    reused = ctx.call_page is not None
    if not reused:
        ctx.call_page = CallPage(driver)

    cap = getattr(driver, "capabilities", None) or {}
    return json.dumps({
        "ok": True,
        "action": "start_session",
        "reused": reused,
        "target": describe_target(ctx.config) if ctx.config else None,
        "browser": cap.get("browserName"),
        "browser_version": cap.get("browserVersion"),
    })


async def close_session(leave_first: bool = True) -> str:
    """
    Leave the call (optionally), cancel pending endpoint messages and quit
    the driver.
    """
    ctx = get_context()
    left = None

    if leave_first and ctx.call_page is not None:
        try:
            left = ctx.call_page.leave()
        except Exception as e:
            # The browser may already be gone; quitting is still required
            logger.warning(f"Leaving before close failed: {e}")
            left = False

    cancelled = ctx.cancel_pending_messages()
    quit_error = close_driver()
    reset_context()

    payload = {
        "ok": quit_error is None,
        "action": "close_session",
        "left": left,
        "cancelled_messages": cancelled,
    }
    if quit_error:
        payload["error"] = quit_error
    return json.dumps(payload)


__all__ = ["start_session", "close_session"]
