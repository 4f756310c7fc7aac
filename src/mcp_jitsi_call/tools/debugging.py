"""Debugging and diagnostic tool implementations."""

import json
from ..context import get_context
from ..utils.diagnostics import collect_diagnostics


async def get_debug_diagnostics_info() -> str:
    """Get debug diagnostics using context."""
    ctx = get_context()

    diagnostics = {
        "summary": collect_diagnostics(driver=ctx.driver, exc=None, config=ctx.config),
        "context_state": {
            "driver_initialized": ctx.is_driver_initialized(),
            "call_page_ready": ctx.is_call_page_ready(),
            "pending_messages": [repr(t) for t in ctx.pending_messages],
        },
    }

    if ctx.is_call_page_ready():
        page = ctx.call_page
        diagnostics["call"] = {
            "num_participants": page.get_num_participants(),
            "request_data": page.get_request_data(),
        }

    return json.dumps({"ok": True, "diagnostics": diagnostics})


__all__ = ["get_debug_diagnostics_info"]
