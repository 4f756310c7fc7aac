"""
Centralized call session state management.

Thread Safety:
    The CallContext itself is NOT thread-safe. Tool calls are serialized
    with the session lock (exclusive_session_access). Background endpoint
    message sends only ever touch the driver, never the context.

Usage:
    from mcp_jitsi_call.context import get_context

    ctx = get_context()
    if ctx.call_page is None:
        ...
"""

from typing import TYPE_CHECKING, List, Optional
from selenium.webdriver.remote.webdriver import WebDriver
from dataclasses import dataclass, field
import asyncio

if TYPE_CHECKING:
    from .pageobjects.call_page import CallPage
    from .utils.retry import RetryTask


@dataclass
class CallContext:
    """
    Encapsulates the state of one call session.

    Attributes:
        driver: Selenium WebDriver instance (local Chrome or Remote)
        call_page: Page object bound to the driver
        config: Environment configuration dictionary
        pending_messages: Endpoint message sends that may still be retrying
        session_lock: Asyncio lock serializing tool calls within this process
    """

    driver: Optional[WebDriver] = None
    call_page: Optional["CallPage"] = None

    # Configuration (should be immutable after initialization)
    config: dict = field(default_factory=dict)

    pending_messages: List["RetryTask"] = field(default_factory=list)

    session_lock: Optional[asyncio.Lock] = None

    def is_driver_initialized(self) -> bool:
        """Check if driver is initialized."""
        return self.driver is not None

    def is_call_page_ready(self) -> bool:
        return self.driver is not None and self.call_page is not None

    def track_message(self, task: "RetryTask") -> None:
        """Remember a background send, dropping the ones that already finished."""
        self.pending_messages = [t for t in self.pending_messages if not t.done()]
        self.pending_messages.append(task)

    def cancel_pending_messages(self) -> int:
        """Cancel every unfinished send. Returns how many were still running."""
        running = [t for t in self.pending_messages if not t.done()]
        for task in running:
            task.cancel()
        self.pending_messages = []
        return len(running)

    def get_session_lock(self) -> asyncio.Lock:
        """Get or create the intra-process asyncio lock."""
        if self.session_lock is None:
            self.session_lock = asyncio.Lock()
        return self.session_lock


# ============================================================================
# Global Context Management
# ============================================================================

_global_context: Optional[CallContext] = None


def get_context() -> CallContext:
    """
    Get or create the global call context.

    All calls return the same instance until reset_context() is called.
    """
    global _global_context

    if _global_context is None:
        # Lazy import to avoid loading .env files at package import time
        try:
            from .config.environment import get_env_config

            _global_context = CallContext(config=get_env_config())
        except Exception:
            # Invalid configuration surfaces later, when the driver is created
            _global_context = CallContext()

    return _global_context


def reset_context() -> None:
    """
    Reset the global context.

    Primarily for testing. In production code use close_session(), which
    also quits the driver.
    """
    global _global_context
    _global_context = None


__all__ = [
    "CallContext",
    "get_context",
    "reset_context",
]
