# mcp_jitsi_call/decorators/ensure.py
import json
import inspect
import functools


def _not_started_payload(include_diagnostics: bool) -> str:
    payload = {
        "ok": False,
        "error": "session_not_started",
        "message": "Call session not started. Please call 'start_session' first before using call actions.",
    }
    if include_diagnostics:
        from ..utils.diagnostics import collect_diagnostics
        payload["diagnostics"] = collect_diagnostics()
    return json.dumps(payload)


def ensure_call_page_ready(_func=None, *, include_diagnostics=False):
    """Short-circuit a tool with a JSON error while there is no call page."""
    def decorator(fn):
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def wrapper(*args, **kwargs):
                from ..context import get_context

                if not get_context().is_call_page_ready():
                    return _not_started_payload(include_diagnostics)
                return await fn(*args, **kwargs)
            return wrapper
        else:
            @functools.wraps(fn)
            def wrapper(*args, **kwargs):
                from ..context import get_context

                if not get_context().is_call_page_ready():
                    return _not_started_payload(include_diagnostics)
                return fn(*args, **kwargs)
            return wrapper
    return decorator if _func is None else decorator(_func)
