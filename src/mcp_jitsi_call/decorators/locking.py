# mcp_jitsi_call/decorators/locking.py
#
# The browser session has a single writer. Tool calls coming in over one MCP
# connection are serialized here; background endpoint message retries are the
# only driver access that bypasses the lock.

import inspect
import functools


__all__ = [
    "exclusive_session_access",
]


def exclusive_session_access(_func=None):
    """
    Serialize calls within this process on the session lock.
    Use on tools that drive the browser.
    """

    def decorator(func):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"exclusive_session_access needs an async function, got {func.__name__}")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            # Import lazily to avoid cycles at module import time
            from mcp_jitsi_call.context import get_context

            lock = get_context().get_session_lock()
            async with lock:
                return await func(*args, **kwargs)
        return wrapper

    return decorator if _func is None else decorator(_func)
