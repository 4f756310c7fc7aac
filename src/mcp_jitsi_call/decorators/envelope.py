# mcp_jitsi_call/decorators/envelope.py

import os
import json
import asyncio
import inspect
import datetime
import functools
import traceback
from typing import Any, Callable


__all__ = [
    "tool_envelope",
]


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    try:
        return json.dumps(value, ensure_ascii=False, default=repr)
    except (TypeError, ValueError):
        return str(value)


def _error_payload(err: Exception, include_tb: bool) -> str:
    payload = {
        "ok": False,
        "summary": f"{err.__class__.__name__}: {err}",
        "error": {
            "type": err.__class__.__name__,
            "message": str(err),
        },
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    if include_tb:
        payload["error"]["traceback"] = traceback.format_exc()
    return json.dumps(payload, ensure_ascii=False)


def tool_envelope(func: Callable):
    """
    Decorator for async MCP tool functions:
      - On success: ensures the return value is a string (json.dumps for non-strings).
      - On error: returns a uniform JSON string with a summary and optional traceback.
    Environment:
      - Set MJC_TOOL_ERRORS_TRACEBACK=0 to suppress traceback in error payloads.
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError(f"tool_envelope needs an async function, got {func.__name__}")

    include_tb = os.getenv("MJC_TOOL_ERRORS_TRACEBACK", "1") not in ("0", "false", "False")

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            result = await func(*args, **kwargs)
        except asyncio.CancelledError:
            # Preserve cooperative cancellation semantics
            raise
        except Exception as e:
            return _error_payload(e, include_tb)
        return _normalize(result)
    return wrapper
